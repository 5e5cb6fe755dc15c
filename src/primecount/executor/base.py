from typing import Callable

Work = Callable[[], None]


class Executor:
    def submit(self, work: Work) -> None: ...
    def join(self) -> None: ...
    def shutdown(self) -> None: ...
