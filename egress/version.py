"""
Resolve a pain schema selector into its message family and revision.

The revision is the trailing two digits of the selector, shifted by one for
pain.008 so both families share the same tiers:

- revision 2: pain.001.00x.02, pain.008.00x.01 (group header carries Grpg/BtchBookg)
- revision 3: pain.001.00x.03, pain.008.00x.02 (batches carry NbOfTxs/CtrlSum/BtchBookg)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from canonical import PainVersion
from egress.errors import ConfigurationError


logger = logging.getLogger(__name__)

DEFAULT_PAIN_VERSION = PainVersion.PAIN_001_001_03

GROUPING_REVISION = 2
TOTALS_REVISION = 3


class MessageFamily(str, Enum):
    CREDIT_TRANSFER = "credit-transfer"
    DIRECT_DEBIT = "direct-debit"

    @property
    def payment_method(self) -> str:
        return "TRF" if self is MessageFamily.CREDIT_TRANSFER else "DD"

    @property
    def initiation_tag(self) -> str:
        return "CstmrCdtTrfInitn" if self is MessageFamily.CREDIT_TRANSFER else "CstmrDrctDbtInitn"

    @property
    def transaction_tag(self) -> str:
        return "CdtTrfTxInf" if self is MessageFamily.CREDIT_TRANSFER else "DrctDbtTxInf"


_FAMILY_PREFIXES = {
    "pain.001": MessageFamily.CREDIT_TRANSFER,
    "pain.008": MessageFamily.DIRECT_DEBIT,
}


@dataclass(frozen=True, slots=True)
class ResolvedVersion:
    selector: PainVersion
    family: MessageFamily
    revision: int


def resolve_version(selector: Optional[Union[PainVersion, str]] = None) -> ResolvedVersion:
    """
    Resolve `selector` (default pain.001.001.03) to (family, revision).

    Raises ConfigurationError for anything outside PainVersion.
    """

    if selector is None:
        selector = DEFAULT_PAIN_VERSION

    try:
        version = PainVersion(selector)
    except ValueError as e:
        raise ConfigurationError(f"Unsupported pain version: {selector!r}") from e

    family = _FAMILY_PREFIXES.get(version.value[:8])
    if family is None:
        raise ConfigurationError(f"Unsupported message family for {version.value}")

    revision = int(version.value[-2:])
    if family is MessageFamily.DIRECT_DEBIT:
        revision += 1

    logger.debug("Resolved %s to %s revision %d", version.value, family.value, revision)
    return ResolvedVersion(selector=version, family=family, revision=revision)
