from minkit.hello_world import HelloWorld


def test_default_greeting():
    obj = HelloWorld(post=lambda text: None)
    assert obj.greeting == "hello world"


def test_bang_sends_greeting_out_of_outlet():
    obj = HelloWorld(post=lambda text: None)
    obj.bang()
    output = obj.output.messages
    assert len(output) == 1
    assert len(output[0]) == 1
    assert output[0][0] == "hello world"


def test_bang_posts_greeting_to_console():
    posted = []
    obj = HelloWorld(post=posted.append)
    obj.bang()
    assert posted == ["hello world"]


def test_argument_sets_greeting():
    posted = []
    obj = HelloWorld("good morning", post=posted.append)
    obj.bang()
    assert obj.output.messages == [["good morning"]]
    assert posted == ["good morning"]


def test_changed_greeting_is_used():
    obj = HelloWorld(post=lambda text: None)
    obj.greeting = "bonjour"
    obj.bang()
    assert obj.output.messages == [["bonjour"]]


def test_maxclass_setup_posts_hello_world():
    posted = []
    obj = HelloWorld("other", post=posted.append)
    obj.maxclass_setup()
    assert posted == ["hello world"]
    assert obj.output.messages == []