"""
Tests for the mail message model

Tests cover:
- Recipient de-duplication and ordering
- Recipient removal
- Field setters
- Sendability checks
"""
import pytest

from minimail.core import MailMessage, RecipientList


class TestRecipientList:
    """Tests for the ordered recipient set"""

    def test_keeps_first_insertion_order(self):
        """Test repeated adds keep the position of the first insertion"""
        recipients = RecipientList()
        for address in ["b@x.com", "a@x.com", "b@x.com", "c@x.com", "a@x.com"]:
            recipients.add(address)

        assert list(recipients) == ["b@x.com", "a@x.com", "c@x.com"]
        assert len(recipients) == 3

    def test_add_reports_whether_inserted(self):
        """Test add returns False for a duplicate"""
        recipients = RecipientList()

        assert recipients.add("a@x.com") is True
        assert recipients.add("a@x.com") is False

    def test_membership_is_exact_string_match(self):
        """Test addresses differing only in case are distinct"""
        recipients = RecipientList(["bob@x.com", "Bob@x.com"])

        assert len(recipients) == 2
        assert "bob@x.com" in recipients
        assert "BOB@x.com" not in recipients

    def test_remove_missing_is_noop(self):
        """Test removing an absent address leaves the list unchanged"""
        recipients = RecipientList(["a@x.com", "b@x.com"])

        assert recipients.remove("z@x.com") is False
        assert recipients.as_tuple() == ("a@x.com", "b@x.com")

    def test_readd_after_remove_goes_to_end(self):
        """Test a removed address re-added is appended"""
        recipients = RecipientList(["a@x.com", "b@x.com"])
        recipients.remove("a@x.com")
        recipients.add("a@x.com")

        assert recipients.as_tuple() == ("b@x.com", "a@x.com")


class TestMailMessageRecipients:
    """Tests for recipient management on a message"""

    @pytest.mark.parametrize(
        "adds, expected",
        [
            ([], ()),
            (["a@x.com"], ("a@x.com",)),
            (["a@x.com", "a@x.com", "a@x.com"], ("a@x.com",)),
            (["c@x.com", "a@x.com", "c@x.com", "b@x.com"], ("c@x.com", "a@x.com", "b@x.com")),
        ],
    )
    def test_add_recipient_deduplicates(self, adds, expected):
        """Test each distinct address appears once in first-insertion order"""
        message = MailMessage()
        for address in adds:
            message.add_recipient(address)

        assert message.recipients == expected

    def test_remove_present_recipient(self):
        """Test removing a present address removes exactly that entry"""
        message = MailMessage(recipients=["a@x.com", "b@x.com", "c@x.com"])

        message.remove_recipient("b@x.com")

        assert message.recipients == ("a@x.com", "c@x.com")

    def test_remove_absent_recipient(self):
        """Test removing an unknown address is silently ignored"""
        message = MailMessage(recipients=["a@x.com"])

        message.remove_recipient("b@x.com")
        message.remove_recipient("b@x.com")

        assert message.recipients == ("a@x.com",)

    def test_recipients_view_is_a_snapshot(self):
        """Test the returned sequence does not change with later edits"""
        message = MailMessage(recipients=["a@x.com"])
        snapshot = message.recipients

        message.add_recipient("b@x.com")

        assert snapshot == ("a@x.com",)
        assert message.recipients == ("a@x.com", "b@x.com")

    def test_constructor_deduplicates(self):
        """Test recipients given to the constructor are de-duplicated too"""
        message = MailMessage(recipients=["a@x.com", "b@x.com", "a@x.com"])

        assert message.recipients == ("a@x.com", "b@x.com")


class TestMailMessageFields:
    """Tests for sender, subject and body"""

    def test_new_message_is_empty(self):
        """Test a fresh message has nothing set"""
        message = MailMessage()

        assert message.sender is None
        assert message.subject is None
        assert message.body == ""
        assert message.recipients == ()

    def test_setters_overwrite(self):
        """Test setters replace earlier values without validation"""
        message = MailMessage()
        message.set_sender("first@x.com")
        message.set_sender("not an address")
        message.set_subject("One")
        message.set_subject("")
        message.set_body("text")

        assert message.sender == "not an address"
        assert message.subject == ""
        assert message.body == "text"

    def test_missing_fields_lists_unset_required(self):
        """Test every unset required field is reported in order"""
        assert MailMessage().missing_fields() == ["sender", "subject", "recipients"]

    def test_empty_subject_still_counts_as_set(self):
        """Test only an unset subject blocks sending"""
        message = MailMessage(sender="a@x.com", subject="", recipients=["b@x.com"])

        assert message.is_sendable()

    def test_removing_last_recipient_makes_unsendable(self):
        """Test a message without recipients is not sendable"""
        message = MailMessage(sender="a@x.com", subject="Hi", recipients=["b@x.com"])
        message.remove_recipient("b@x.com")

        assert not message.is_sendable()
        assert message.missing_fields() == ["recipients"]
