"""
Status state machines for drafts, campaigns and team members.

Each machine maps an action name to the statuses it may start from and the
status it lands in. Services ask the machine for the next status before
writing anything, so an out-of-order click (approve a sent draft, unban an
active user) fails with InvalidTransition and leaves the row untouched.
"""
from typing import Dict, List, Optional, Tuple

from outreach.errors import InvalidTransition


class StateMachine:

    def __init__(self, entity: str, transitions: Dict[str, Tuple[Tuple[str, ...], Optional[str]]]):
        self.entity = entity
        self.transitions = transitions

    @property
    def actions(self) -> List[str]:
        return list(self.transitions)

    def next_status(self, current: str, action: str) -> Optional[str]:
        """Status reached by applying action to current. None means the row is removed."""
        rule = self.transitions.get(action)
        if rule is None or current not in rule[0]:
            raise InvalidTransition(self.entity, current, action)
        return rule[1]

    def transition_to(self, current: str, target: str) -> str:
        """Return the action that moves current → target, or raise."""
        for action, (sources, dest) in self.transitions.items():
            if dest == target and current in sources:
                return action
        raise InvalidTransition(self.entity, current, f'move to {target}')

    def allowed_actions(self, current: str) -> List[str]:
        return [action for action, (sources, _) in self.transitions.items() if current in sources]


DRAFT_WORKFLOW = StateMachine('draft', {
    'approve': (('pending',), 'approved'),
    'reject':  (('pending',), 'rejected'),
    'send':    (('approved',), 'sent'),
})

CAMPAIGN_WORKFLOW = StateMachine('campaign', {
    'pause':     (('active',), 'paused'),
    'resume':    (('paused',), 'active'),
    'archive':   (('active', 'paused', 'completed'), 'archived'),
    'unarchive': (('archived',), 'paused'),
})

USER_WORKFLOW = StateMachine('user', {
    'approve': (('pending_approval',), 'active'),
    'reject':  (('pending_approval',), None),
    'ban':     (('active',), 'banned'),
    'unban':   (('banned',), 'active'),
})

# Audit labels per draft action; send is logged once, as the message it creates
DRAFT_AUDIT_ACTIONS = {
    'approve': 'Draft Approved',
    'reject': 'Draft Rejected',
    'send': 'Message Sent',
}
