# document.py
from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from numbers import Real
from typing import Any, Optional, Tuple

from docpyside import config
from docpyside.utils.field_resolver import (
    field_keys,
    resolve_field,
    resolve_flag,
    resolve_sequence,
    resolve_text,
)

ALIGNMENTS = tuple(config.HMAP)


def _finite_or(value: Any, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        return float(default)
    value = float(value)
    return value if math.isfinite(value) else float(default)


def _alignment(value: Any, default: str) -> str:
    value = str(value).strip().lower() if value is not None else ""
    return value if value in ALIGNMENTS else default


@dataclass(frozen=True)
class Signer:
    name: str = ""
    title: str = ""
    signature_url: Optional[str] = None
    signature_size_mm: float = config.DEFAULT_SIGNATURE_SIZE_MM
    signature_offset_x_mm: float = 0.0
    signature_offset_y_mm: float = 0.0

    @classmethod
    def from_raw(cls, raw: Any) -> "Signer":
        return cls(
            name=resolve_text(raw, "name"),
            title=resolve_text(raw, "title"),
            signature_url=resolve_field(raw, field_keys("signatureUrl")),
            signature_size_mm=_finite_or(
                resolve_field(raw, field_keys("signatureSizeMm")),
                config.DEFAULT_SIGNATURE_SIZE_MM,
            ),
            signature_offset_x_mm=_finite_or(resolve_field(raw, field_keys("signatureOffsetXMm")), 0.0),
            signature_offset_y_mm=_finite_or(resolve_field(raw, field_keys("signatureOffsetYMm")), 0.0),
        )


@dataclass(frozen=True)
class DocumentModel:
    """Canonical, fully-defaulted view of a document record."""
    document_number: str = ""
    decision_number: str = ""
    subject: str = ""
    reference_date: str = ""
    receiver: str = ""
    sender_unit: str = ""

    header_title: str = config.DEFAULT_HEADER_TITLE
    header_org_name: str = config.DEFAULT_HEADER_ORG_NAME
    logo_url: Optional[str] = None
    right_logo_url: Optional[str] = None

    footer_org_name: str = ""
    footer_address: str = config.DEFAULT_FOOTER_ADDRESS
    footer_contact: str = config.DEFAULT_FOOTER_CONTACT
    footer_phone: str = config.DEFAULT_FOOTER_PHONE

    content: str = ""
    signers: Tuple[Signer, ...] = field(default_factory=tuple)

    show_header: bool = True
    show_date: bool = True
    show_sayi: bool = True
    show_konu: bool = True
    show_karar_no: bool = True
    show_receiver: bool = True
    show_signatures: bool = True
    show_footer: bool = True

    text_align: str = config.DEFAULT_TEXT_ALIGN
    receiver_text_align: str = config.DEFAULT_RECEIVER_ALIGN

    @property
    def has_signatures(self) -> bool:
        """True when the signature row will actually render."""
        return self.show_signatures and len(self.signers) > 0

    @property
    def display_date(self) -> str:
        """Reference date as DD.MM.YYYY; today when unset, raw text when unparseable."""
        if not self.reference_date:
            return date.today().strftime(config.DATE_FORMAT)
        text = self.reference_date.strip()
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return text
        return parsed.strftime(config.DATE_FORMAT)

    @property
    def display_document_number(self) -> str:
        return self.document_number or config.EMPTY_DOCUMENT_NUMBER


def normalize_document(raw: Any) -> DocumentModel:
    """
    Derive the canonical DocumentModel from a raw record (mapping or object).
    Pure: the input is only read, and absent fields fall back to defaults.
    """
    signers = tuple(Signer.from_raw(s) for s in resolve_sequence(raw, "signers") if s is not None)

    return DocumentModel(
        document_number=resolve_text(raw, "documentNumber"),
        decision_number=resolve_text(raw, "decisionNumber"),
        subject=resolve_text(raw, "subject"),
        reference_date=resolve_text(raw, field_keys("referenceDate", "date")),
        receiver=resolve_text(raw, "receiver"),
        sender_unit=resolve_text(raw, field_keys("senderUnit", "sender")),
        header_title=resolve_text(raw, "headerTitle", config.DEFAULT_HEADER_TITLE),
        header_org_name=resolve_text(raw, "headerOrgName", config.DEFAULT_HEADER_ORG_NAME),
        logo_url=resolve_field(raw, field_keys("logoUrl")),
        right_logo_url=resolve_field(raw, field_keys("rightLogoUrl")),
        footer_org_name=resolve_text(raw, "footerOrgName"),
        footer_address=resolve_text(raw, "footerAddress", config.DEFAULT_FOOTER_ADDRESS),
        footer_contact=resolve_text(raw, "footerContact", config.DEFAULT_FOOTER_CONTACT),
        footer_phone=resolve_text(raw, "footerPhone", config.DEFAULT_FOOTER_PHONE),
        content=resolve_text(raw, field_keys("content", "description")),
        signers=signers,
        show_header=resolve_flag(raw, "showHeader"),
        show_date=resolve_flag(raw, "showDate"),
        show_sayi=resolve_flag(raw, "showSayi"),
        show_konu=resolve_flag(raw, "showKonu"),
        show_karar_no=resolve_flag(raw, "showKararNo"),
        show_receiver=resolve_flag(raw, "showReceiver"),
        show_signatures=resolve_flag(raw, "showSignatures"),
        show_footer=resolve_flag(raw, "showFooter"),
        text_align=_alignment(resolve_field(raw, "textAlign"), config.DEFAULT_TEXT_ALIGN),
        receiver_text_align=_alignment(
            resolve_field(raw, "receiverTextAlign"), config.DEFAULT_RECEIVER_ALIGN
        ),
    )


class DocumentNormalizer:
    """Memoizes normalize_document() on the identity of the last input."""

    def __init__(self) -> None:
        self._last_raw: Any = None
        self._last: Optional[DocumentModel] = None

    def __call__(self, raw: Any) -> DocumentModel:
        if self._last is not None and raw is self._last_raw:
            return self._last
        self._last_raw = raw
        self._last = normalize_document(raw)
        return self._last
