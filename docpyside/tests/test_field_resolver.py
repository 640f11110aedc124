from types import SimpleNamespace

from docpyside.utils.field_resolver import (
    field_keys,
    resolve_field,
    resolve_flag,
    resolve_sequence,
    resolve_text,
    snake_case,
)


def test_snake_case():
    assert snake_case("signatureSizeMm") == "signature_size_mm"
    assert snake_case("subject") == "subject"


def test_field_keys_orders_camel_then_snake_then_aliases():
    assert field_keys("senderUnit", "sender") == ("senderUnit", "sender_unit", "sender")


def test_camel_beats_snake():
    assert resolve_field({"documentNumber": "A", "document_number": "B"}, "documentNumber") == "A"


def test_snake_used_when_camel_missing_none_or_blank():
    assert resolve_field({"document_number": "B"}, "documentNumber") == "B"
    assert resolve_field({"documentNumber": None, "document_number": "B"}, "documentNumber") == "B"
    assert resolve_field({"documentNumber": "  ", "document_number": "B"}, "documentNumber") == "B"


def test_default_when_absent():
    assert resolve_field({}, "subject", "x") == "x"
    assert resolve_field(None, "subject", "x") == "x"


def test_objects_are_read_by_attribute():
    record = SimpleNamespace(header_title="Başlık")
    assert resolve_text(record, "headerTitle", "T.C.") == "Başlık"


def test_flag_true_unless_any_key_is_false():
    assert resolve_flag({}, "showFooter") is True
    assert resolve_flag(None, "showFooter") is True
    assert resolve_flag({"showFooter": False}, "showFooter") is False
    assert resolve_flag({"show_footer": False}, "showFooter") is False
    assert resolve_flag({"showFooter": True, "show_footer": False}, "showFooter") is False
    assert resolve_flag({"showFooter": False, "show_footer": True}, "showFooter") is False
    assert resolve_flag({"showFooter": None, "show_footer": False}, "showFooter") is False
    assert resolve_flag({"showFooter": 0}, "showFooter") is True
    assert resolve_flag(SimpleNamespace(show_header=False), "showHeader") is False


def test_resolve_text_stringifies():
    assert resolve_text({"documentNumber": 42}, "documentNumber") == "42"


def test_resolve_sequence_rejects_non_sequences():
    assert resolve_sequence({"signers": "abc"}, "signers") == ()
    assert resolve_sequence({"signers": 5}, "signers") == ()
    assert resolve_sequence({"signers": [1, 2]}, "signers") == (1, 2)
