"""Core data models for the governance metadata tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class Person:
    """A named member of a group's leadership or a liaison."""

    name: str = ""
    github: str = ""
    company: str = ""


@dataclass
class Team:
    """A GitHub team associated with a group."""

    name: str = ""
    description: str = ""


@dataclass
class Contact:
    """Ways to reach a group or subproject."""

    slack: str = ""
    mailing_list: str = ""
    private_mailing_list: str = ""
    teams: List[Team] = field(default_factory=list)
    liaison: Optional[Person] = None


@dataclass
class Meeting:
    """A recurring meeting. Only its presence is audited."""

    description: str = ""
    day: str = ""
    time: str = ""
    tz: str = ""
    frequency: str = ""
    url: str = ""
    archive_url: str = ""
    recordings_url: str = ""


@dataclass
class Leadership:
    chairs: List[Person] = field(default_factory=list)
    tech_leads: List[Person] = field(default_factory=list)
    emeritus_leads: List[Person] = field(default_factory=list)

    def everyone(self) -> List[Person]:
        """Chairs, then tech leads, then emeritus leads."""
        return [*self.chairs, *self.tech_leads, *self.emeritus_leads]


@dataclass
class Subproject:
    name: str = ""
    description: str = ""
    contact: Optional[Contact] = None
    owners: List[str] = field(default_factory=list)
    meetings: List[Meeting] = field(default_factory=list)


@dataclass
class Group:
    """A SIG, working group, user group or committee entry from sigs.yaml."""

    dir: str = ""
    name: str = ""
    label: str = ""
    mission_statement: str = ""
    charter_link: str = ""
    leadership: Leadership = field(default_factory=Leadership)
    meetings: List[Meeting] = field(default_factory=list)
    contact: Contact = field(default_factory=Contact)
    subprojects: List[Subproject] = field(default_factory=list)
    stakeholder_sigs: List[str] = field(default_factory=list)

    def dir_name(self, prefix: str) -> str:
        """Directory the group's documentation is expected to live in, e.g. ``sig-apps``."""
        return f"{prefix}-{self.name.replace(' ', '-').lower()}"

    def label_name(self, prefix: str) -> str:
        """Label the group is expected to use on OWNERS files, e.g. ``apps``."""
        return self.dir_name(prefix).replace(f"{prefix}-", "", 1)


@dataclass
class Context:
    """Root of sigs.yaml: every group, split by category."""

    sigs: List[Group] = field(default_factory=list)
    working_groups: List[Group] = field(default_factory=list)
    user_groups: List[Group] = field(default_factory=list)
    committees: List[Group] = field(default_factory=list)

    def prefix_to_groups(self) -> Dict[str, List[Group]]:
        """Map each category prefix to its groups, in audit order."""
        return {
            "sig": self.sigs,
            "wg": self.working_groups,
            "ug": self.user_groups,
            "committee": self.committees,
        }


@dataclass
class OwnersInfo:
    """The parts of an OWNERS file the auditor cross-checks."""

    approvers: List[str] = field(default_factory=list)
    reviewers: List[str] = field(default_factory=list)
    required_reviewers: List[str] = field(default_factory=list)
    emeritus_approvers: List[str] = field(default_factory=list)
    labels: List[str] = field(default_factory=list)
    no_parent_owners: bool = False

    def all_owners(self) -> List[str]:
        return [*self.approvers, *self.reviewers, *self.required_reviewers]
