"""A small dependency graph of asynchronous build steps."""

import asyncio
import logging
from collections import OrderedDict, namedtuple
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Tuple

logger = logging.getLogger('pressmark.graph')

Step = namedtuple('Step', ['name', 'func', 'deps'])


class TaskGraph:
    """
    Named async steps wired by their dependencies.

    A step receives the results of its dependencies as positional arguments,
    in the order they were declared. Dependencies must be added before the
    steps that use them, so the graph is always acyclic.
    """

    def __init__(self, on_complete: Optional[Callable[[str], None]] = None):
        self.on_complete = on_complete
        self.steps: 'OrderedDict[str, Step]' = OrderedDict()
        self.completed: List[str] = []
        self.failed: Optional[str] = None

    def add(self, name: str, func: Callable[..., Awaitable[Any]], deps: Iterable[str] = ()) -> None:
        deps = tuple(deps)
        if name in self.steps:
            raise ValueError(f"Step already defined: {name}")
        unknown = [dep for dep in deps if dep not in self.steps]
        if unknown:
            raise ValueError(f"Step {name} depends on undefined steps: {', '.join(unknown)}")
        self.steps[name] = Step(name, func, deps)

    def dependencies(self, name: str) -> Tuple[str, ...]:
        return self.steps[name].deps

    async def _run_step(self, step: Step, tasks: Dict[str, 'asyncio.Task']):
        args = [await tasks[dep] for dep in step.deps]
        logger.debug(f"Starting {step.name}")
        try:
            result = await step.func(*args)
        except Exception:
            if self.failed is None:
                self.failed = step.name
            raise
        self.completed.append(step.name)
        logger.debug(f"Finished {step.name}")
        if self.on_complete is not None:
            self.on_complete(step.name)
        return result

    async def run(self) -> Dict[str, Any]:
        """
        Run every step as soon as its dependencies are done.

        The first failing step cancels everything still running and its
        exception is re-raised.
        """
        tasks = OrderedDict()
        for name, step in self.steps.items():
            tasks[name] = asyncio.ensure_future(self._run_step(step, tasks))
        if not tasks:
            return {}
        try:
            await asyncio.wait(list(tasks.values()), return_when=asyncio.FIRST_EXCEPTION)
        finally:
            for task in tasks.values():
                if not task.done():
                    task.cancel()
            # Collects every outcome so no exception goes unretrieved.
            await asyncio.gather(*tasks.values(), return_exceptions=True)
        if self.failed is not None:
            raise tasks[self.failed].exception()
        return {name: task.result() for name, task in tasks.items()}
