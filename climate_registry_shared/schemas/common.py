from enum import Enum


class ProjectType(str, Enum):
    ADAPTATION = "Adaptation"
    MITIGATION = "Mitigation"
    CROSS_CUTTING = "Cross-cutting"


class ApprovalState(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


# Approved and rejected are terminal.
APPROVAL_TRANSITIONS: dict[ApprovalState, set[ApprovalState]] = {
    ApprovalState.PENDING: {ApprovalState.APPROVED, ApprovalState.REJECTED},
    ApprovalState.APPROVED: set(),
    ApprovalState.REJECTED: set(),
}


def validate_transition(current: ApprovalState, target: ApprovalState) -> tuple[bool, str]:
    """Validate a submission state transition.

    Returns (is_valid, error_message).
    """
    if current == target:
        return False, f"Submission is already {current.value}"

    if target not in APPROVAL_TRANSITIONS[current]:
        return False, (
            f"Cannot transition from {current.value} to {target.value}: "
            f"{current.value} is terminal"
        )
    return True, ""
