"""Unit tests for the KYC and support ticket state machines"""

from backoffice.domain.models.kyc_submission import (
    ALLOWED_TRANSITIONS as KYC_TRANSITIONS,
    KycStatus,
    can_transition as kyc_can_transition,
)
from backoffice.domain.models.support_ticket import (
    ALLOWED_TRANSITIONS as TICKET_TRANSITIONS,
    TicketStatus,
    can_transition as ticket_can_transition,
)


class TestKycStatusStateMachine:
    """Test KycStatus values and transition validation"""

    def test_kyc_status_enum_values(self):
        """Test KycStatus wire values"""
        assert KycStatus.PENDING.value == "pending"
        assert KycStatus.APPROVED.value == "approved"
        assert KycStatus.REJECTED.value == "rejected"

    def test_initial_state_transition(self):
        """Test a first submission can only enter PENDING"""
        assert kyc_can_transition(None, KycStatus.PENDING) is True
        assert kyc_can_transition(None, KycStatus.APPROVED) is False
        assert kyc_can_transition(None, KycStatus.REJECTED) is False

    def test_pending_decisions(self):
        """Test PENDING → APPROVED | REJECTED"""
        assert kyc_can_transition(KycStatus.PENDING, KycStatus.APPROVED) is True
        assert kyc_can_transition(KycStatus.PENDING, KycStatus.REJECTED) is True
        assert kyc_can_transition(KycStatus.PENDING, KycStatus.PENDING) is False

    def test_rejected_can_resubmit(self):
        """Test REJECTED → PENDING (resubmission)"""
        assert kyc_can_transition(KycStatus.REJECTED, KycStatus.PENDING) is True
        assert kyc_can_transition(KycStatus.REJECTED, KycStatus.APPROVED) is False

    def test_approved_is_terminal(self):
        """Test APPROVED has no outgoing transitions"""
        assert KYC_TRANSITIONS[KycStatus.APPROVED] == []
        for status in KycStatus:
            assert kyc_can_transition(KycStatus.APPROVED, status) is False

    def test_every_status_has_an_entry(self):
        """Test the transition table covers every status"""
        for status in KycStatus:
            assert status in KYC_TRANSITIONS


class TestTicketStatusStateMachine:
    """Test TicketStatus values and normal-path transitions"""

    def test_ticket_status_enum_values(self):
        """Test TicketStatus wire values"""
        assert TicketStatus.OPEN.value == "open"
        assert TicketStatus.IN_PROGRESS.value == "in-progress"
        assert TicketStatus.RESOLVED.value == "resolved"
        assert TicketStatus.CLOSED.value == "closed"

    def test_new_tickets_open(self):
        """Test new tickets can only start OPEN"""
        assert ticket_can_transition(None, TicketStatus.OPEN) is True
        assert ticket_can_transition(None, TicketStatus.IN_PROGRESS) is False

    def test_open_to_in_progress(self):
        """Test OPEN → IN_PROGRESS (first reviewer reply or assignment)"""
        assert ticket_can_transition(TicketStatus.OPEN, TicketStatus.IN_PROGRESS) is True
        assert ticket_can_transition(TicketStatus.OPEN, TicketStatus.CLOSED) is False

    def test_in_progress_to_final(self):
        """Test IN_PROGRESS → RESOLVED | CLOSED"""
        assert ticket_can_transition(TicketStatus.IN_PROGRESS, TicketStatus.RESOLVED) is True
        assert ticket_can_transition(TicketStatus.IN_PROGRESS, TicketStatus.CLOSED) is True
        assert ticket_can_transition(TicketStatus.IN_PROGRESS, TicketStatus.OPEN) is False

    def test_final_states(self):
        """Test RESOLVED and CLOSED have no normal-path transitions"""
        assert TICKET_TRANSITIONS[TicketStatus.RESOLVED] == []
        assert TICKET_TRANSITIONS[TicketStatus.CLOSED] == []
