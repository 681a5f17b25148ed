"""Catalog of known git forges.

Maps a hostname to the forge software it runs and the host it is. This is
one of the two places that must change to support a new forge; the other is
the rewrite table in ``htmlpreview.normalizer``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ForgeSoftware(StrEnum):
    GITHUB = "GitHub"
    BITBUCKET = "BitBucket"
    GITLAB = "GitLab"
    FORGEJO = "ForgeJo"
    SOURCEHUT = "SourceHut"
    UNKNOWN = "Unknown"


class ForgeHost(StrEnum):
    GITHUB_COM = "github.com"
    BITBUCKET_ORG = "bitbucket.org"
    GITLAB_COM = "gitlab.com"
    ALLMENDE_IO = "lab.allmende.io"
    GITLAB_OPENSOURCEECOLOGY_DE = "gitlab.opensourceecology.de"
    CODEBERG_ORG = "codeberg.org"
    GIT_SR_HT = "git.sr.ht"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class ForgeIdentity:
    software: ForgeSoftware
    host: ForgeHost

    @property
    def is_known(self) -> bool:
        return self.software is not ForgeSoftware.UNKNOWN


UNKNOWN_FORGE = ForgeIdentity(ForgeSoftware.UNKNOWN, ForgeHost.UNKNOWN)

# hostname (lowercase) → identity
KNOWN_FORGES: dict[str, ForgeIdentity] = {
    "github.com": ForgeIdentity(ForgeSoftware.GITHUB, ForgeHost.GITHUB_COM),
    "raw.githubusercontent.com": ForgeIdentity(ForgeSoftware.GITHUB, ForgeHost.GITHUB_COM),
    "bitbucket.org": ForgeIdentity(ForgeSoftware.BITBUCKET, ForgeHost.BITBUCKET_ORG),
    "gitlab.com": ForgeIdentity(ForgeSoftware.GITLAB, ForgeHost.GITLAB_COM),
    "lab.allmende.io": ForgeIdentity(ForgeSoftware.GITLAB, ForgeHost.ALLMENDE_IO),
    "gitlab.opensourceecology.de": ForgeIdentity(
        ForgeSoftware.GITLAB, ForgeHost.GITLAB_OPENSOURCEECOLOGY_DE
    ),
    "codeberg.org": ForgeIdentity(ForgeSoftware.FORGEJO, ForgeHost.CODEBERG_ORG),
    "git.sr.ht": ForgeIdentity(ForgeSoftware.SOURCEHUT, ForgeHost.GIT_SR_HT),
}


def identify(hostname: str | None) -> ForgeIdentity:
    """Return the forge behind ``hostname``, or ``UNKNOWN_FORGE``.

    An unknown result is normal: it marks an arbitrary URL (a CDN link, a
    personal site) that must be passed through untouched.
    """
    if not hostname:
        return UNKNOWN_FORGE
    return KNOWN_FORGES.get(hostname.rstrip(".").lower(), UNKNOWN_FORGE)
