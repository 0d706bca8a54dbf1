"""Locate and parse sigs.yaml and OWNERS files into the governance models."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .logging import get_logger
from .models import (
    Contact,
    Context,
    Group,
    Leadership,
    Meeting,
    OwnersInfo,
    Person,
    Subproject,
    Team,
)

SIGS_FILENAME = "sigs.yaml"

_LOGGER = get_logger("sigs")


class SigsError(RuntimeError):
    """Base class for failures loading sigs.yaml."""


class SigsFileNotFoundError(SigsError):
    """Raised when no sigs.yaml can be located."""


class SigsParseError(SigsError):
    """Raised when sigs.yaml exists but cannot be parsed."""


class OwnersParseError(RuntimeError):
    """Raised when an OWNERS payload is not a valid OWNERS document."""


def find_sigs_yaml(start: Path) -> Path:
    """Return the nearest sigs.yaml at or above ``start``."""
    start = start.expanduser().resolve()
    if start.is_file():
        return start
    for directory in (start, *start.parents):
        candidate = directory / SIGS_FILENAME
        if candidate.is_file():
            _LOGGER.debug("Found %s at %s", SIGS_FILENAME, candidate)
            return candidate
    raise SigsFileNotFoundError(f"no {SIGS_FILENAME} found in {start} or any parent directory")


def load_context(path: Path) -> Context:
    """Parse a sigs.yaml file into a :class:`Context`."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SigsFileNotFoundError(f"{path} does not exist") from exc
    except OSError as exc:
        raise SigsParseError(f"Unable to read {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise SigsParseError(f"{path} is not valid UTF-8: {exc}") from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SigsParseError(f"Failed to parse {path}: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise SigsParseError(f"{path} must contain a mapping at the root")
    return context_from_dict(data)


def context_from_dict(data: Dict[str, Any]) -> Context:
    context = Context(
        sigs=_groups(data.get("sigs")),
        working_groups=_groups(data.get("workinggroups")),
        user_groups=_groups(data.get("usergroups")),
        committees=_groups(data.get("committees")),
    )
    _LOGGER.debug(
        "Loaded %d sigs, %d working groups, %d user groups, %d committees",
        len(context.sigs),
        len(context.working_groups),
        len(context.user_groups),
        len(context.committees),
    )
    return context


def parse_owners_info(payload: bytes | str) -> OwnersInfo:
    """Parse the body of an OWNERS file."""
    if isinstance(payload, bytes):
        try:
            payload = payload.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise OwnersParseError(f"OWNERS file is not valid UTF-8: {exc}") from exc
    try:
        data = yaml.safe_load(payload)
    except yaml.YAMLError as exc:
        raise OwnersParseError(str(exc)) from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise OwnersParseError("OWNERS file must contain a mapping at the root")
    options = _as_dict(data.get("options"))
    return OwnersInfo(
        approvers=_as_str_list(data.get("approvers")),
        reviewers=_as_str_list(data.get("reviewers")),
        required_reviewers=_as_str_list(data.get("required_reviewers")),
        emeritus_approvers=_as_str_list(data.get("emeritus_approvers")),
        labels=_as_str_list(data.get("labels")),
        no_parent_owners=bool(options.get("no_parent_owners", False)),
    )


def _groups(value: Any) -> List[Group]:
    return [_group(item) for item in _as_list(value) if isinstance(item, dict)]


def _group(data: Dict[str, Any]) -> Group:
    leadership = _as_dict(data.get("leadership"))
    return Group(
        dir=_as_str(data.get("dir")),
        name=_as_str(data.get("name")),
        label=_as_str(data.get("label")),
        mission_statement=_as_str(data.get("mission_statement")),
        charter_link=_as_str(data.get("charter_link")),
        leadership=Leadership(
            chairs=_people(leadership.get("chairs")),
            tech_leads=_people(leadership.get("tech_leads")),
            emeritus_leads=_people(leadership.get("emeritus_leads")),
        ),
        meetings=_meetings(data.get("meetings")),
        contact=_contact(data.get("contact")) or Contact(),
        subprojects=[
            _subproject(item) for item in _as_list(data.get("subprojects")) if isinstance(item, dict)
        ],
        stakeholder_sigs=_as_str_list(data.get("stakeholder_sigs")),
    )


def _subproject(data: Dict[str, Any]) -> Subproject:
    return Subproject(
        name=_as_str(data.get("name")),
        description=_as_str(data.get("description")),
        contact=_contact(data.get("contact")),
        owners=_as_str_list(data.get("owners")),
        meetings=_meetings(data.get("meetings")),
    )


def _contact(value: Any) -> Optional[Contact]:
    if not isinstance(value, dict):
        return None
    liaison = value.get("liaison")
    return Contact(
        slack=_as_str(value.get("slack")),
        mailing_list=_as_str(value.get("mailing_list")),
        private_mailing_list=_as_str(value.get("private_mailing_list")),
        teams=[
            Team(name=_as_str(item.get("name")), description=_as_str(item.get("description")))
            for item in _as_list(value.get("teams"))
            if isinstance(item, dict)
        ],
        liaison=_person(liaison) if isinstance(liaison, dict) else None,
    )


def _people(value: Any) -> List[Person]:
    return [_person(item) for item in _as_list(value) if isinstance(item, dict)]


def _person(data: Dict[str, Any]) -> Person:
    return Person(
        name=_as_str(data.get("name")),
        github=_as_str(data.get("github")),
        company=_as_str(data.get("company")),
    )


def _meetings(value: Any) -> List[Meeting]:
    meetings: List[Meeting] = []
    for item in _as_list(value):
        if not isinstance(item, dict):
            continue
        meetings.append(
            Meeting(
                description=_as_str(item.get("description")),
                day=_as_str(item.get("day")),
                time=_as_str(item.get("time")),
                tz=_as_str(item.get("tz")),
                frequency=_as_str(item.get("frequency")),
                url=_as_str(item.get("url")),
                archive_url=_as_str(item.get("archive_url")),
                recordings_url=_as_str(item.get("recordings_url")),
            )
        )
    return meetings


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _as_str(value: Any) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    return str(value) if isinstance(value, (str, int, float)) else ""


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "OwnersParseError",
    "SIGS_FILENAME",
    "SigsError",
    "SigsFileNotFoundError",
    "SigsParseError",
    "context_from_dict",
    "find_sigs_yaml",
    "load_context",
    "parse_owners_info",
]
