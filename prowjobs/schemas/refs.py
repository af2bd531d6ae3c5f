"""
Refs schema - the source-control state a job runs against.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Pull:
    """A pull request included in a job run."""
    number: int
    author: str = ""
    sha: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"number": self.number, "author": self.author, "sha": self.sha}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Pull":
        return cls(
            number=int(data["number"]),
            author=data.get("author", ""),
            sha=data.get("sha", ""),
        )


@dataclass(frozen=True)
class Refs:
    """
    Repository, base branch and pull requests a job is evaluated against.

    Immutable so the same instance can be shared by every spec in a
    run_after_success chain.

    Attributes:
        org: Repository owner
        repo: Repository name
        base_ref: Branch the pulls merge into
        base_sha: Commit of base_ref under test
        pulls: Ordered pull requests (empty for postsubmits)
    """
    org: str
    repo: str
    base_ref: str = ""
    base_sha: str = ""
    pulls: tuple[Pull, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON output."""
        result: dict[str, Any] = {
            "org": self.org,
            "repo": self.repo,
            "base_ref": self.base_ref,
            "base_sha": self.base_sha,
        }
        if self.pulls:
            result["pulls"] = [p.to_dict() for p in self.pulls]
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Refs":
        """Deserialize from dictionary."""
        return cls(
            org=data["org"],
            repo=data["repo"],
            base_ref=data.get("base_ref", ""),
            base_sha=data.get("base_sha", ""),
            pulls=tuple(Pull.from_dict(p) for p in data.get("pulls") or []),
        )
