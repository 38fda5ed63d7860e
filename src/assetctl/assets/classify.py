"""Filename grammar for fingerprinted output assets.

Every filename in an output directory falls into exactly one of three shapes:

- ``StandardFingerprint``: ``<stem>-<hex digest>.<ext...>`` written by our own
  build, for example ``app-f2e1ec14.js`` or ``app-f2e1ec15.js.map``.
- ``PreFingerprinted``: ``<stem>-<token>.digested.<ext...>`` named by an
  external bundler; the token alphabet is wider than hex.
- ``Unfingerprinted``: anything else, such as the manifest file itself.

Each shape reduces to a ``family_key``: the filename with its digest removed.
Files sharing a family key are versions of the same asset.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal, Union

DIGEST_MIN_LENGTH = 7
DIGEST_MAX_LENGTH = 128

PREDIGESTED_RE = re.compile(
    rf"^(?P<stem>.+)-(?P<digest>[0-9A-Za-z_-]{{{DIGEST_MIN_LENGTH},{DIGEST_MAX_LENGTH}}})"
    r"(?P<suffix>\.digested(?:\.[^.]+)*)$"
)
STANDARD_RE = re.compile(
    rf"^(?P<stem>.+)-(?P<digest>[0-9a-f]{{{DIGEST_MIN_LENGTH},{DIGEST_MAX_LENGTH}}})"
    r"(?P<suffix>(?:\.[^.]+)+)$"
)

FingerprintKind = Literal["standard", "predigested", "unfingerprinted"]


@dataclass(frozen=True)
class StandardFingerprint:
    filename: str
    stem: str
    digest: str
    suffix: str
    kind: FingerprintKind = "standard"

    @property
    def logical_path(self) -> str:
        return f"{self.stem}{self.suffix}"

    @property
    def family_key(self) -> str:
        return self.logical_path

    @property
    def is_predigested(self) -> bool:
        return False


@dataclass(frozen=True)
class PreFingerprinted:
    filename: str
    stem: str
    digest: str
    suffix: str
    kind: FingerprintKind = "predigested"

    @property
    def logical_path(self) -> str:
        # the external tool already chose the public name
        return self.filename

    @property
    def family_key(self) -> str:
        return f"{self.stem}{self.suffix}"

    @property
    def is_predigested(self) -> bool:
        return True


@dataclass(frozen=True)
class Unfingerprinted:
    filename: str
    kind: FingerprintKind = "unfingerprinted"

    @property
    def digest(self) -> str:
        return ""

    @property
    def logical_path(self) -> str:
        return self.filename

    @property
    def family_key(self) -> str:
        return self.filename

    @property
    def is_predigested(self) -> bool:
        return False


Classification = Union[StandardFingerprint, PreFingerprinted, Unfingerprinted]


def classify(filename: str) -> Classification:
    """Classify an output filename. Never raises."""
    # `.digested.` names also fit the generic shape, so they go first.
    match = PREDIGESTED_RE.fullmatch(filename)
    if match:
        return PreFingerprinted(filename, match["stem"], match["digest"], match["suffix"])
    match = STANDARD_RE.fullmatch(filename)
    if match:
        return StandardFingerprint(filename, match["stem"], match["digest"], match["suffix"])
    return Unfingerprinted(filename)


def family_key(filename: str) -> str:
    return classify(filename).family_key
