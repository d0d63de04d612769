"""
Admission checks shared by every API-backed provider and action.
"""
import logging

from ..cache import ResourceKind
from ..interaction.topic_matcher import matches_topic
from .runtime import Message, TurnState

logger = logging.getLogger(__name__)


def api_allowed(state: TurnState) -> bool:
    """
    Check the gate's verdict for this turn.
    
    Missing flags (gate did not run or failed) count as a refusal.
    """
    flags = state.dispatch_flags if state is not None else None
    return flags is not None and flags.allow_api_actions


def admit(resource_kind: ResourceKind, message: Message, state: TurnState) -> bool:
    """
    Decide whether a resource action may run on this turn.
    
    :param resource_kind: Resource the action serves
    :param message: Incoming message
    :param state: Composed TurnState
    :return: True only if the gate allowed API actions and the message is on topic
    """
    if not api_allowed(state):
        logger.info(f"{resource_kind.value} action declined: no API approval from dispatch gate")
        return False
    
    admitted = matches_topic(resource_kind, message.text)
    logger.debug(f"{resource_kind.value} action topic match: {admitted}")
    return admitted
