"""Audit sigs.yaml groups against community governance rules.

Every check writes its findings through a :class:`~sigaudit.diagnostics.Reporter`
and returns; nothing is aggregated and no finding stops the walk. Remote
checks go through an injectable fetcher so tests never touch the network.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from .diagnostics import Reporter
from .fetch import FetchError, Fetcher, http_get
from .logging import get_logger
from .models import Contact, Context, Group, OwnersInfo, Person, Subproject
from .owners import DEFAULT_PRIMARY_REPOSITORY, RAW_GITHUB_URL_PATTERN, match_owner_url
from .sigs import OwnersParseError, parse_owners_info

SELECT_ALL = "all"

_LOGGER = get_logger("auditor")


class Auditor:
    """Walks a :class:`Context` and reports governance findings."""

    def __init__(
        self,
        context: Context,
        *,
        root: Path,
        reporter: Optional[Reporter] = None,
        fetcher: Optional[Fetcher] = None,
        primary_repository: str = DEFAULT_PRIMARY_REPOSITORY,
    ) -> None:
        self.context = context
        self.root = root
        self.reporter = reporter or Reporter()
        self._fetch = fetcher or http_get
        self.primary_repository = primary_repository

    def audit(self, names: Sequence[str]) -> List[str]:
        """Audit every group matched by ``names`` and return the filters that matched nothing."""
        missing: List[str] = []
        for name in names:
            found = False
            for group_type, groups in self.context.prefix_to_groups().items():
                for group in groups:
                    if name == SELECT_ALL or name in group.name or name in group.dir:
                        self.audit_group(group_type, group)
                        found = True
            if not found:
                _LOGGER.debug("Filter %r matched no group", name)
                self.reporter.line(f"[{name}] not found")
                missing.append(name)
        return missing

    def audit_group(self, group_type: str, group: Group) -> None:
        report = self.reporter
        if not group.dir:
            report.warning("missing 'dir' key")
        if not group.name:
            report.warning("missing 'name' key")
        report.section(f"Processing {group_type} [{group.dir}/{group.name}]")

        expected_dir = group.dir_name(group_type)
        if expected_dir != group.dir:
            report.error(f"expected dir: {expected_dir}, got: {group.dir}")
        expected_label = group.label_name(group_type)
        if expected_label != group.label:
            report.error(f"expected label: {expected_label}, got: {group.label}")

        if group_type == "sig":
            if not group.mission_statement:
                report.error("missing 'mission_statement' key")
            if not group.charter_link:
                report.error("missing 'charter_link' key")
            else:
                self.audit_charter_link(group)
        self.audit_stakeholders(group_type, group)
        if not group.label:
            report.warning("missing 'label' key")
        self.audit_leadership(group_type, group)
        if not group.meetings:
            report.warning("missing 'meetings' key")
        self.audit_contact(group.contact)

        if group_type in ("sig", "committee"):
            if not group.subprojects:
                report.warning("missing 'subprojects' key")
            else:
                self.audit_subprojects(group)
        elif group.subprojects:
            report.error(
                "only sigs and committees can own code / have subprojects, "
                f"found: {len(group.subprojects)} subprojects"
            )

    def audit_leadership(self, group_type: str, group: Group) -> None:
        report = self.reporter
        leadership = group.leadership
        if not leadership.chairs:
            report.warning("missing 'chairs' key (in 'leadership' section)")
        elif group_type == "sig" and len(leadership.chairs) == 1:
            report.warning(
                "please consider adding more folks in as 'chairs' (in 'leadership' section)"
            )
        if not leadership.tech_leads:
            report.warning("missing 'tech_leads' key (in 'leadership' section)")
            if group_type == "sig":
                report.warning(
                    "if chairs are serving as tech leads, please add them explicitly "
                    "in 'tech_leads' key (in 'leadership' section)"
                )
        for person in leadership.everyone():
            self.audit_person("leadership", person)

    def audit_person(self, where: str, person: Person) -> None:
        if not person.name:
            self.reporter.warning(f"missing 'name' key in {where}")
        if not person.github:
            self.reporter.warning(f"missing 'github' key in {where} for {person.name}")
        if not person.company:
            self.reporter.optional(f"missing 'company' key in {where} for {person.name}")

    def audit_contact(self, contact: Contact) -> None:
        report = self.reporter
        if not contact.slack:
            report.warning("missing 'slack' in contact")
        if not contact.mailing_list:
            report.warning("missing 'mailing_list' in contact")
        if not contact.private_mailing_list:
            report.optional("missing 'private_mailing_list' in contact")
        if not contact.teams:
            report.optional("missing 'teams' in contact")
        if contact.liaison is not None:
            self.audit_person("contact/liaison", contact.liaison)

    def audit_charter_link(self, group: Group) -> None:
        """Check a remote charter answers 200, or a local one exists under the group dir."""
        link = group.charter_link
        if link.startswith("http"):
            try:
                reachable = self._fetch(link).ok
            except FetchError as exc:
                _LOGGER.debug("charter_link %s failed: %s", link, exc)
                reachable = False
            if not reachable:
                self.reporter.warning(f"unable to reach url for 'charter_link' - {link}")
            return
        charter_path = self.root / group.dir / link
        if not charter_path.exists():
            self.reporter.warning(f"missing file for 'charter_link' - {charter_path}")

    def audit_stakeholders(self, group_type: str, group: Group) -> None:
        if group_type != "wg":
            if group.stakeholder_sigs:
                self.reporter.error("only 'workinggroups' may have stakeholder_sigs")
            return
        if not group.stakeholder_sigs:
            self.reporter.warning("missing 'stakeholder_sigs' key")
            return
        sig_names = {sig.name for sig in self.context.sigs}
        for stakeholder in group.stakeholder_sigs:
            if stakeholder not in sig_names:
                self.reporter.warning(f"stakeholder_sigs entry '{stakeholder}' not found (typo?)")

    def audit_subprojects(self, group: Group) -> None:
        report = self.reporter
        for subproject in group.subprojects:
            report.section(f"Processing subproject {subproject.name} under {group.dir}")
            if not subproject.name:
                report.warning("missing 'name' key")
            if not subproject.description:
                report.warning("missing 'description' key")
            if subproject.contact is None:
                report.warning("missing 'contact' key")
            else:
                self.audit_contact(subproject.contact)
            if not subproject.owners:
                report.error("missing 'owners' key")
            else:
                self.audit_owners_files(group, subproject)
            if not subproject.meetings:
                report.warning("missing 'meetings' key")

    def audit_owners_files(self, group: Group, subproject: Subproject) -> None:
        report = self.reporter
        report.section(f"Processing owners files for {group.dir}/{subproject.name}")
        for url in subproject.owners:
            owner_url = match_owner_url(url)
            if owner_url is None:
                report.error(f"owner urls should match regexp {RAW_GITHUB_URL_PATTERN}, found: {url}")
                continue
            try:
                response = self._fetch(url)
            except FetchError as exc:
                report.warning(f"stale url {url} - {exc}")
                continue
            if not response.ok:
                report.warning(f"stale url {url} - http status code = {response.status}")
                continue
            try:
                info = parse_owners_info(response.body)
            except OwnersParseError as exc:
                report.error(f"unable to parse owners file at {url} url - {exc}")
                continue
            if not owner_url.is_repository(self.primary_repository):
                _LOGGER.debug("Skipping label checks for %s outside %s", url, self.primary_repository)
                continue
            self.audit_owners_info(group, info, url)

    def audit_owners_info(self, group: Group, info: OwnersInfo, url: str) -> None:
        """Cross-check an OWNERS file in the primary repository against the group label."""
        report = self.reporter
        if not info.labels:
            report.warning(
                "file at url does not have any labels. Please ensure OWNERS file has "
                f"labels reflecting {group.dir} - {url}"
            )
        elif group.label and not any(label.endswith(group.label) for label in info.labels):
            report.warning(
                f"file does not have a label that ends with {group.label}. Please ensure "
                f"OWNERS file has labels reflecting {group.dir} - {url}"
            )
        if not any(group.label in owner for owner in info.all_owners()):
            report.warning(
                "file at url does not seem to have approvers/reviewers with the sig alias "
                "(defined in OWNERS_ALIASES). Please consider adding a sig alias to "
                f"OWNERS_ALIASES and add them to approvers/reviewers in this file - {url}"
            )


__all__ = ["Auditor", "SELECT_ALL"]
