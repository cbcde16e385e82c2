"""An object that posts a greeting and sends it out of its outlet."""

from __future__ import annotations

from typing import Callable, Optional

from minkit.outlet import Outlet


class HelloWorld:
    """Post a greeting to the console and send it out when banged."""

    description = "Post to the Max Console."

    def __init__(
        self,
        greeting: Optional[str] = None,
        post: Callable[[str], None] = print,
    ) -> None:
        self.greeting = "hello world" if greeting is None else str(greeting)
        self.output = Outlet(
            "(anything) output the message which is posted to the max console"
        )
        self._post = post

    def bang(self) -> None:
        """Post the greeting and send it out of the outlet."""
        the_greeting = self.greeting
        self._post(the_greeting)
        self.output.send(the_greeting)

    def maxclass_setup(self) -> None:
        """Post the class-load greeting."""
        self._post("hello world")