from .base import Executor, Work


class ImmediateExecutor(Executor):
    """Runs each unit of work inside submit(); errors surface at the call site."""

    def submit(self, work: Work) -> None:
        work()

    def join(self) -> None:
        return None

    def shutdown(self) -> None:
        return None
