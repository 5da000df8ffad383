"""Tests for infrastructure.communicator.service module."""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest
import structlog

from infrastructure.communicator import (
    Address,
    ChannelNotFoundError,
    ChannelRegistry,
    Communicator,
    DeliveryDefaults,
    InvalidInputError,
    ScenarioNotFoundError,
)
from infrastructure.i18n import LocalizedText, translate_tree
from infrastructure.notifications import EmailFactory, EmailMessage, InMemoryTransport
from infrastructure.operations import OperationResult
from infrastructure.templating import render_tree

SUPPORT = {"name": "Support", "email": "support@example.com"}
ADA = {"name": "", "email": "ada@example.com"}
OPS = {"name": "", "email": "ops@example.com"}


@pytest.mark.unit
class TestCommunicatorInit:
    def test_creates_registry_from_translator(self, mock_communicator):
        assert isinstance(mock_communicator.registry, ChannelRegistry)
        assert mock_communicator.registry.valid_locales == frozenset({"en", "fr"})

    def test_uses_given_registry(self, mock_message_factory, translator, renderer):
        registry = ChannelRegistry()
        communicator = Communicator(
            mock_message_factory, translator, renderer, registry=registry
        )
        assert communicator.registry is registry

    def test_uses_given_defaults(self, mock_message_factory, translator, renderer):
        defaults = DeliveryDefaults(default_from="support@example.com")
        communicator = Communicator(
            mock_message_factory, translator, renderer, defaults=defaults
        )
        assert communicator.get_default_from() == Address(email="support@example.com")
        assert communicator.defaults is defaults


@pytest.mark.unit
class TestCommunicatorState:
    """Tests for sender, recipient and form data accessors."""

    def test_setters_return_communicator(self, mock_communicator):
        assert mock_communicator.set_from("a@example.com") is mock_communicator
        assert mock_communicator.set_to("a@example.com") is mock_communicator
        assert mock_communicator.add_to("b@example.com") is mock_communicator
        assert mock_communicator.set_default_from("c@example.com") is mock_communicator
        assert mock_communicator.set_default_to([]) is mock_communicator
        assert mock_communicator.add_default_to("d@example.com") is mock_communicator
        assert mock_communicator.set_form_data({}) is mock_communicator
        assert mock_communicator.add_channel("x", {}) is mock_communicator
        assert mock_communicator.add_channels({}) is mock_communicator

    def test_from(self, mock_communicator):
        assert mock_communicator.get_from() is None
        mock_communicator.set_from("Ada <ada@example.com>")
        assert mock_communicator.get_from() == Address(
            name="Ada", email="ada@example.com"
        )

    def test_to(self, mock_communicator):
        mock_communicator.set_to("ada@example.com")
        mock_communicator.add_to({"name": "Grace", "email": "grace@example.com"})

        assert [a.email for a in mock_communicator.get_to()] == [
            "ada@example.com",
            "grace@example.com",
        ]

    def test_set_to_replaces(self, mock_communicator):
        mock_communicator.set_to(["ada@example.com", "grace@example.com"])
        mock_communicator.set_to("alan@example.com")
        assert mock_communicator.get_to() == [Address(email="alan@example.com")]

    def test_default_from(self, mock_communicator):
        assert mock_communicator.get_default_from() is None
        mock_communicator.set_default_from(SUPPORT)
        assert mock_communicator.get_default_from() == Address(**SUPPORT)

    def test_default_to(self, mock_communicator):
        mock_communicator.set_default_to("ops@example.com")
        mock_communicator.add_default_to("audit@example.com")

        assert [a.email for a in mock_communicator.get_default_to()] == [
            "ops@example.com",
            "audit@example.com",
        ]

    def test_defaults_are_replaced_not_mutated(self, mock_communicator):
        mock_communicator.set_default_to("ops@example.com")
        before = mock_communicator.defaults

        mock_communicator.add_default_to("audit@example.com")

        assert len(before.default_to) == 1
        assert mock_communicator.defaults is not before

    @pytest.mark.parametrize("value", [42, None, {"name": "Ada"}])
    def test_invalid_addresses(self, mock_communicator, value):
        with pytest.raises(InvalidInputError):
            mock_communicator.set_from(value)
        with pytest.raises(InvalidInputError):
            mock_communicator.set_default_to(value)

    def test_form_data(self, mock_communicator):
        assert mock_communicator.get_form_data() == {}
        mock_communicator.set_form_data({"email": "ada@example.com"})
        assert mock_communicator.get_form_data() == {"email": "ada@example.com"}

    def test_form_data_is_copied(self, mock_communicator):
        data = {"email": "ada@example.com"}
        mock_communicator.set_form_data(data)
        data["email"] = "changed@example.com"
        assert mock_communicator.get_form_data() == {"email": "ada@example.com"}

    def test_channel_pass_throughs(self, mock_communicator):
        assert mock_communicator.has_channel("user") is True
        assert mock_communicator.has_scenario("welcome", "user") is True
        assert mock_communicator.has_scenario("welcome", "admin") is False
        assert "welcome" in mock_communicator.get_channel("user")
        scenario = mock_communicator.get_scenario("welcome", "user")
        assert scenario["template_ident"] == "welcome-tpl"

        with pytest.raises(ChannelNotFoundError):
            mock_communicator.get_channel("admin")


@pytest.mark.unit
class TestPrepare:
    """Tests for Communicator.prepare."""

    def test_welcome_scenario_end_to_end(self, mock_communicator, mock_renderer):
        """The subject template is rendered; the template identifier is not."""
        payload = mock_communicator.prepare("welcome", "user", {"name": "Ada"})

        mock_renderer.render_template.assert_called_once()
        template, context = mock_renderer.render_template.call_args.args
        assert template == "Hi {{name}}"
        assert context["name"] == "Ada"
        assert payload["template_ident"] == "welcome-tpl"
        assert payload["subject"] == "Hi {{name}}"

    def test_welcome_scenario_rendered(self, communicator):
        payload = communicator.prepare("welcome", "user", {"name": "Ada"})

        assert payload == {
            "from": SUPPORT,
            "to": [],
            "template_data": {"currentLanguage": "en", "name": "Ada"},
            "subject": "Hi Ada",
            "template_ident": "welcome-tpl",
        }

    def test_reserved_and_non_string_keys_in_custom_data(self, communicator):
        payload = communicator.prepare(
            "welcome", "user", {"name": "Ada", "self": "me", 1: "one"}
        )

        assert payload["subject"] == "Hi Ada"
        assert payload["template_data"]["self"] == "me"
        assert payload["template_data"][1] == "one"

    def test_active_locale(self, communicator, translator):
        translator.set_locale("fr")
        payload = communicator.prepare("welcome", "user", {"name": "Ada"})

        assert payload["subject"] == "Salut Ada"
        assert payload["template_data"]["currentLanguage"] == "fr"

    def test_nested_scenario_data(self, communicator):
        """Nested localized values are translated and rendered."""
        payload = communicator.prepare("reset", "user", {"name": "Ada"})

        assert payload["subject"] == "Reset your password"
        assert payload["template_ident"] == "reset-{{ name }}"
        assert payload["template_data"] == {
            "currentLanguage": "en",
            "cta": "Reset",
            "link": "https://example.com/reset?user=Ada",
            "name": "Ada",
        }

    def test_default_recipients_extend_scenario_recipients(self, communicator):
        communicator.set_default_to("ops@example.com")
        payload = communicator.prepare("reset", "user", {"name": "Ada"})

        assert payload["to"] == [
            OPS,
            {"name": "Security", "email": "security@example.com"},
        ]

    def test_explicit_recipients_override_defaults(self, communicator):
        communicator.set_default_to("ops@example.com")
        before = communicator.prepare("welcome", "user", {"name": "Ada"})

        communicator.set_to("ada@example.com")
        after = communicator.prepare("welcome", "user", {"name": "Ada"})

        assert before["to"] == [OPS]
        assert after["to"] == [ADA]
        assert {k: v for k, v in after.items() if k != "to"} == {
            k: v for k, v in before.items() if k != "to"
        }

    def test_explicit_recipients_override_scenario(self, communicator):
        communicator.set_to("ada@example.com")
        payload = communicator.prepare("reset", "user", {"name": "Ada"})
        assert payload["to"] == [ADA]

    def test_clearing_explicit_recipients(self, communicator):
        communicator.set_default_to("ops@example.com")
        communicator.set_to("ada@example.com")
        communicator.set_to([])

        payload = communicator.prepare("welcome", "user")
        assert payload["to"] == [OPS]

    def test_explicit_sender_overrides_default(self, communicator):
        communicator.set_from("Ada <ada@example.com>")
        payload = communicator.prepare("welcome", "user")
        assert payload["from"] == {"name": "Ada", "email": "ada@example.com"}

    def test_no_sender(self, mock_communicator):
        payload = mock_communicator.prepare("welcome", "user")
        assert "from" not in payload

    def test_localized_default_sender_name(self, communicator, translator):
        communicator.set_default_from(
            {"name": {"en": "Support", "fr": "Soutien"}, "email": "s@example.com"}
        )
        translator.set_locale("fr")

        payload = communicator.prepare("welcome", "user")
        assert payload["from"] == {"name": "Soutien", "email": "s@example.com"}

    @pytest.mark.parametrize("custom_data", ["hello", 42, ["a", "b"], True])
    def test_scalar_custom_data_is_rejected(self, communicator, custom_data):
        with pytest.raises(InvalidInputError, match="cannot be scalar"):
            communicator.prepare("welcome", "user", custom_data)

    def test_no_custom_data(self, communicator):
        payload = communicator.prepare("welcome", "user")

        assert payload["template_data"] == {"currentLanguage": "en"}
        assert payload["subject"] == "Hi "

    def test_custom_data_with_template_data(self, communicator):
        """Custom data holding template_data is merged at the top level."""
        payload = communicator.prepare(
            "welcome",
            "user",
            {"template_data": {"name": "Ada"}, "subject": "Custom", "campaign": "q3"},
        )

        assert payload["subject"] == "Custom"
        assert payload["campaign"] == "q3"
        assert payload["template_data"] == {"currentLanguage": "en", "name": "Ada"}

    def test_custom_data_wins_over_scenario(self, communicator):
        payload = communicator.prepare(
            "reset", "user", {"template_data": {"cta": "Go", "currentLanguage": "x"}}
        )
        assert payload["template_data"]["cta"] == "Go"
        assert payload["template_data"]["currentLanguage"] == "x"

    def test_template_data_is_available_under_its_key(self, communicator):
        communicator.add_channel(
            "user", {"welcome": {"subject": "Hi {{ template_data.name }}"}}
        )
        payload = communicator.prepare("welcome", "user", {"name": "Ada"})
        assert payload["subject"] == "Hi Ada"

    def test_form_data_in_render_context(self, communicator):
        communicator.add_channel(
            "contact",
            {"received": {"subject": "Message from {{ form_data.email }}"}},
        )
        communicator.set_form_data({"email": "ada@example.com"})

        payload = communicator.prepare("received", "contact")
        assert payload["subject"] == "Message from ada@example.com"
        assert "form_data" not in payload

    def test_attachments(self, communicator):
        payload = communicator.prepare(
            "welcome", "user", attachments=["/tmp/terms.pdf"]
        )
        assert payload["attachments"] == ["/tmp/terms.pdf"]

    def test_single_attachment_is_wrapped(self, communicator):
        payload = communicator.prepare("welcome", "user", attachments="/tmp/terms.pdf")
        assert payload["attachments"] == ["/tmp/terms.pdf"]

    def test_single_path_attachment_is_wrapped(self, communicator):
        terms = Path("/tmp/terms.pdf")
        payload = communicator.prepare("welcome", "user", attachments=terms)
        assert payload["attachments"] == [terms]

    def test_empty_attachments_are_omitted(self, communicator):
        payload = communicator.prepare("welcome", "user", attachments=[])
        assert "attachments" not in payload

    def test_unknown_scenario(self, communicator):
        with pytest.raises(ScenarioNotFoundError):
            communicator.prepare("missing", "user")

    def test_unknown_channel(self, communicator):
        with pytest.raises(ScenarioNotFoundError):
            communicator.prepare("welcome", "missing")

    def test_scenario_must_resolve_to_mapping(self, communicator):
        communicator.add_channel("odd", {"note": {"en": "Hi", "fr": "Salut"}})

        with pytest.raises(InvalidInputError, match="map of message fields"):
            communicator.prepare("note", "odd")

    def test_registry_is_not_changed(self, communicator):
        first = communicator.prepare("reset", "user", {"name": "Ada"})
        second = communicator.prepare("reset", "user", {"name": "Grace"})

        assert first["template_data"]["link"].endswith("Ada")
        assert second["template_data"]["link"].endswith("Grace")
        scenario = communicator.get_scenario("reset", "user")
        assert isinstance(scenario["subject"], LocalizedText)
        assert scenario["template_data"]["link"].endswith("{{ name }}")

    def test_custom_data_is_not_mutated(self, communicator):
        custom_data = {"template_data": {"name": "Ada"}}
        payload = communicator.prepare("welcome", "user", custom_data)
        payload["template_data"]["extra"] = 1

        assert custom_data == {"template_data": {"name": "Ada"}}

    def test_translate_and_render_are_idempotent(self, communicator, translator):
        payload = communicator.prepare("reset", "user", {"name": "Ada"})
        context = {"name": "Ada"}

        again = render_tree(
            translate_tree(payload, translator), context, communicator.renderer
        )
        assert again == payload

    def test_dispatch_context_is_reset(self, communicator):
        communicator.prepare("welcome", "user")
        assert structlog.contextvars.get_contextvars() == {}

    def test_concurrent_prepare(self, communicator):
        names = [f"user-{i}" for i in range(20)]

        with ThreadPoolExecutor(max_workers=4) as executor:
            payloads = list(
                executor.map(
                    lambda name: communicator.prepare(
                        "welcome", "user", {"name": name}
                    ),
                    names,
                )
            )

        assert [p["subject"] for p in payloads] == [f"Hi {n}" for n in names]


@pytest.mark.unit
class TestCreateAndDispatch:
    """Tests for Communicator.create and Communicator.dispatch."""

    def test_create(self, mock_communicator, mock_message_factory, mock_message):
        message = mock_communicator.create("welcome", "user", {"name": "Ada"})

        assert message is mock_message
        mock_message_factory.create.assert_called_once_with()
        payload = mock_message.set_data.call_args.args[0]
        assert payload["template_ident"] == "welcome-tpl"

    def test_create_email_message(self, communicator):
        communicator.set_to("ada@example.com")
        message = communicator.create("welcome", "user", {"name": "Ada"})

        assert isinstance(message, EmailMessage)
        assert message.envelope.subject == "Hi Ada"

    def test_dispatch(self, communicator, transport):
        communicator.set_to("ada@example.com")

        assert communicator.dispatch("welcome", "user", {"name": "Ada"}) is True

        assert len(transport.outbox) == 1
        envelope = transport.outbox[0]
        assert envelope.subject == "Hi Ada"
        assert envelope.template_ident == "welcome-tpl"
        assert envelope.sender == Address(**SUPPORT)
        assert envelope.recipients == [Address(email="ada@example.com")]
        assert envelope.template_data == {"currentLanguage": "en", "name": "Ada"}

    def test_dispatch_with_mock_message(self, mock_communicator, mock_message):
        mock_message.send.return_value = False
        assert mock_communicator.dispatch("welcome", "user") is False
        mock_message.send.assert_called_once_with()

    def test_dispatch_transport_failure(self, translator, renderer, channels):
        transport = InMemoryTransport(
            failure=OperationResult.transient_error("Connection reset")
        )
        communicator = Communicator(EmailFactory(transport), translator, renderer)
        communicator.add_channels(channels)
        communicator.set_from("support@example.com").set_to("ada@example.com")

        assert communicator.dispatch("welcome", "user", {"name": "Ada"}) is False
        assert transport.outbox == []

    def test_dispatch_without_recipients(self, communicator, transport):
        """Payloads that cannot form a message fail before sending."""
        with pytest.raises(InvalidInputError, match="Invalid message payload"):
            communicator.dispatch("welcome", "user", {"name": "Ada"})
        assert transport.outbox == []

    def test_dispatch_propagates_prepare_errors(self, mock_communicator):
        with pytest.raises(ScenarioNotFoundError):
            mock_communicator.dispatch("missing", "user")
        with pytest.raises(InvalidInputError):
            mock_communicator.dispatch("welcome", "user", "hello")

    def test_send_is_dispatch(self, communicator, transport):
        communicator.set_to("ada@example.com")
        assert communicator.send("welcome", "user", {"name": "Ada"}) is True
        assert len(transport.outbox) == 1
