"""
Results reported by workflow steps.
"""
from typing import List
from pydantic import BaseModel


class StepResult(BaseModel):
    """
    Outcome of one workflow step.
    """
    step: str
    ok: bool = True
    message: str = ""

    @classmethod
    def success(cls, step: str, message: str = "") -> "StepResult":
        return cls(step=step, ok=True, message=message)

    @classmethod
    def failure(cls, step: str, message: str) -> "StepResult":
        return cls(step=step, ok=False, message=message)


class WorkflowResult(BaseModel):
    """
    Ordered step results of a workflow, folded into one exit status.
    """
    command: str
    steps: List[StepResult] = []

    def add(self, result: StepResult) -> StepResult:
        self.steps.append(result)
        return result

    @property
    def ok(self) -> bool:
        return all(step.ok for step in self.steps)

    @property
    def failed_step(self):
        for step in self.steps:
            if not step.ok:
                return step
        return None

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1
