from .pr_review_workflow import PRReviewWorkflow, WorkflowState

__all__ = ["PRReviewWorkflow", "WorkflowState"]
