from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple
from urllib.parse import urlsplit

from ..core.exceptions import RepositoryConfigurationError


@dataclass(frozen=True)
class AuthenticationInfo:
    """Access key pair; ``username`` is the AK, ``password`` the SK."""
    username: Optional[str] = None
    password: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return bool(self.username and self.password)


@dataclass(frozen=True)
class Repository:
    """Remote repository location, ``bos://<endpoint>/<bucket>/<base-directory...>``."""
    id: str
    url: str

    @property
    def protocol(self) -> str:
        return urlsplit(self.url).scheme

    @property
    def host(self) -> str:
        return urlsplit(self.url).netloc

    @property
    def basedir(self) -> str:
        return urlsplit(self.url).path


def parse_basedir(basedir: str) -> Tuple[str, str]:
    """
    Split a repository base directory into ``(bucket, base_directory)``.

    ``/my-bucket/releases/maven`` -> ``("my-bucket", "/releases/maven")``

    Raises:
        RepositoryConfigurationError: fewer than three segments, or an empty
            bucket or base directory segment
    """
    segments = (basedir or "").split("/")
    if len(segments) < 3:
        raise RepositoryConfigurationError(
            basedir, "expected a path of the form /<bucket>/<base-directory>"
        )
    bucket = segments[1]
    rest = [s for s in segments[2:] if s]
    if not bucket or not rest:
        raise RepositoryConfigurationError(
            basedir, "bucket and base directory must both be non-empty"
        )
    return bucket, "/" + "/".join(rest)
