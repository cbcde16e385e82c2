# minkit

A collection of small, message-driven objects. Each object has methods that
take messages (`bang`, numbers, lists, dictionaries, blocks of samples). It
also has outlets that record what it produces.

## Installation

```
pip install minkit
```

To run the test suite:

```
pip install "minkit[test]"
pytest
```

## What is inside

- `minkit.outlet.Outlet` records every message sent to it. Each message is
  kept as a list in `messages`. `send(*args)` records one message, `clear()`
  forgets them all, and an optional `on_send` callback sees each message as
  it is sent.
- `minkit.timer.Timer` runs a callback once after `delay(milliseconds)`.
  Calling `delay` again replaces the pending run, and `stop()` cancels it.
  The callback runs on a background thread.
- `minkit.hello_world.HelloWorld`: on `bang()` it posts its `greeting` and
  sends it out of `output`. `maxclass_setup()` posts `"hello world"`.
- `minkit.beat`:
  - `BeatPattern` bangs through a repeating pattern of intervals in
    milliseconds. `dictionary({"pattern": [...]})` replaces the pattern.
  - `BeatRandom` bangs at random intervals between `minimum` and `maximum`.
    Neither bound goes below 1 ms.
  - Both objects are started and stopped with `toggle(value)` or the `on`
    property. Each tick sends the interval out of `interval_out` and
    `"bang"` out of `bang_out`.
- `minkit.convolve`: `convolve(values, kernel)` convolves a list with a
  kernel and keeps the length of the input. `Convolve.list(*args)` does the
  same with its `kernel`, which defaults to `[1.0, 0.0]`.
- `minkit.dict_join.DictJoin` joins dictionaries.
  - `dictionary(d, inlet=1)` stores `d` as the right-hand dictionary.
  - `dictionary(d, inlet=0)` merges `d` into a copy of it and sends
    `("dictionary", merged)`. Keys already on the right win.
  - `bang()` resends the last merged dictionary.
- `minkit.edge.Edge` and `minkit.edge.EdgeLow` send `"bang"` out of
  `output_true` when a sample goes from zero to non-zero. They send it out of
  `output_false` on the way back. Feed them one sample at a time by calling
  the object, or a block at a time with `process(samples)`.
- `minkit.list_process.ListProcess` acts on incoming lists according to its
  `Operation`:
  - `COLLECT` gathers items, and `bang()` sends and clears them.
  - `AVERAGE` sends the mean and the population standard deviation.
  - `PRODUCT` sends the product.
- `minkit.buffer_ops`:
  - `SampleBuffer` holds frames × channels of `float32` samples. It has
    clamped `lookup` and `store`, `resize` and `resize_in_samples`, and
    change listeners.
  - `BufferIndex.perform(indices)` reads the buffer at rounded indices.
  - `BufferLoop.perform(samples)` plays the buffer as a loop and returns the
    output and a sync ramp. It records the input into the buffer while
    `record` is set.
- `minkit.environment`:
  - `os_version_string()`, `mac_address()` and `unique_id()` describe the
    current host.
  - `Environment.bang()` sends these, together with the platform and
    architecture, out of its five outlets.
  - `windows_display_string(WindowsVersionInfo(...))`, `mac_version_string`
    and `format_mac_address` build the display strings from given values.
- `minkit.textbuffer.TextBuffer` is a growable byte buffer that reserves
  capacity `unit` bytes at a time. It has `put`, `putc`, `put_utf8`,
  `printf`, `set`, `slurp`, `prefix`, `read_from` and `getvalue`.
- `minkit.autolink`:
  - `is_safe(url)` checks for a safe scheme.
  - `match_www`, `match_email` and `match_url` find links at an offset in
    text. Each returns an `AutolinkMatch` or `None`.
- `minkit.cli_options`:
  - `parse_options(argv, on_short, on_long, on_argument)` walks mixed short
    options, long options and arguments, and honours `--`.
  - `parse_int`, `strip_prefix` and `format_option` are helpers for it.
  - `OptionError` is the exception for callbacks to raise.

## Examples

```python
from minkit.convolve import Convolve

conv = Convolve(kernel=[0.5, 0.5])
conv.list(1.0, 2.0, 3.0, 4.0)
print(conv.output.messages[-1])   # [0.5, 1.5, 2.5, 3.5]
```

```python
from minkit.autolink import match_www, match_email

text = b"see www.example.com, please"
print(match_www(text, 4).link)     # b'www.example.com'

mail = b"mail jane@example.com now"
found = match_email(mail, mail.index(b"@"))
print(found.link, found.rewind)    # b'jane@example.com' 4
```

## What it does not do

- The package provides no command-line programs. `minkit.cli_options`,
  `minkit.textbuffer` and `minkit.autolink` are building blocks only; there
  is no Markdown-to-HTML renderer.
- Audio objects do not open sound devices. They process the sample blocks
  handed to them and return the results.
- There is no patching environment that wires outlets together. Use the
  `on_send` callback of `Outlet` to do that yourself.