"""
app/flow/states.py

Purpose: Defines the guest list enrollment states

- Enum for each step (FORM, VERIFICATION, SUCCESS)
- Single source of truth for flow stages
- Which actions each state accepts
- Metadata for each state
"""

from enum import Enum
from typing import Dict, List
from dataclasses import dataclass


class EnrollmentState(str, Enum):
    """
    Steps of the guest list enrollment flow.
    Errors do not get a state: they are attached to the current one.
    """

    FORM = "FORM"
    VERIFICATION = "VERIFICATION"
    SUCCESS = "SUCCESS"


class EnrollmentAction(str, Enum):
    SUBMIT = "submit"
    RESEND = "resend"
    BACK = "back"
    VERIFY = "verify"


@dataclass
class StateMetadata:
    """
    Metadata associated with each enrollment state.
    """
    name: EnrollmentState
    display_name: str
    step_number: int
    total_steps: int = 3
    requires_user_input: bool = True
    can_go_back: bool = False
    description: str = ""


STATE_METADATA: Dict[EnrollmentState, StateMetadata] = {
    EnrollmentState.FORM: StateMetadata(
        name=EnrollmentState.FORM,
        display_name="Your Details",
        step_number=1,
        description="Collect name, email and phone"
    ),
    EnrollmentState.VERIFICATION: StateMetadata(
        name=EnrollmentState.VERIFICATION,
        display_name="Verify Phone",
        step_number=2,
        can_go_back=True,
        description="Enter the 6-digit code sent by SMS"
    ),
    EnrollmentState.SUCCESS: StateMetadata(
        name=EnrollmentState.SUCCESS,
        display_name="You're In",
        step_number=3,
        requires_user_input=False,
        description="Phone verified, entry confirmed"
    ),
}


# Valid state transitions
STATE_TRANSITIONS: Dict[EnrollmentState, List[EnrollmentState]] = {
    EnrollmentState.FORM: [
        EnrollmentState.VERIFICATION,
    ],
    EnrollmentState.VERIFICATION: [
        EnrollmentState.VERIFICATION,  # Resend
        EnrollmentState.FORM,  # Back
        EnrollmentState.SUCCESS,
    ],
    EnrollmentState.SUCCESS: [],  # Terminal: only close leaves it
}


# Actions each state accepts
STATE_ACTIONS: Dict[EnrollmentState, List[EnrollmentAction]] = {
    EnrollmentState.FORM: [EnrollmentAction.SUBMIT],
    EnrollmentState.VERIFICATION: [
        EnrollmentAction.RESEND,
        EnrollmentAction.BACK,
        EnrollmentAction.VERIFY,
    ],
    EnrollmentState.SUCCESS: [],
}


def is_valid_transition(from_state: EnrollmentState, to_state: EnrollmentState) -> bool:
    """
    Checks if a state transition is valid.

    Args:
        from_state: Current state
        to_state: Target state

    Returns:
        True if transition is allowed, False otherwise
    """
    return to_state in STATE_TRANSITIONS.get(from_state, [])


def is_action_allowed(state: EnrollmentState, action: EnrollmentAction) -> bool:
    return action in STATE_ACTIONS.get(state, [])


def get_state_metadata(state: EnrollmentState) -> StateMetadata:
    return STATE_METADATA[state]


def get_progress_message(state: EnrollmentState) -> str:
    """
    Generates a progress message for the current state, e.g. "Step 2 of 3".
    """
    metadata = get_state_metadata(state)
    return f"Step {metadata.step_number} of {metadata.total_steps}"
