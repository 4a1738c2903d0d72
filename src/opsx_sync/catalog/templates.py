"""Canonical skill and command templates for the OPSX workflow.

Template text is opaque to the rest of the package: adapters wrap it,
they never look inside. Bump the entry version in
:mod:`opsx_sync.catalog.entries` whenever a template below changes.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_LICENSE = "MIT"
DEFAULT_COMPATIBILITY = "Requires the openspec CLI."
DEFAULT_AUTHOR = "openspec"
DEFAULT_CATEGORY = "Workflow"


@dataclass(frozen=True)
class SkillTemplate:
    """Content of one SKILL.md file."""

    name: str
    description: str
    instructions: str
    license: str = DEFAULT_LICENSE
    compatibility: str = DEFAULT_COMPATIBILITY


@dataclass(frozen=True)
class CommandTemplate:
    """Content of one slash command, before tool formatting."""

    name: str
    description: str
    category: str
    tags: tuple[str, ...]
    content: str


_EXPLORE = """Enter explore mode. Think through the problem with the user before any change exists.

- Read the relevant specs under `openspec/specs/` and any active change under `openspec/changes/`.
- Ask clarifying questions; sketch options and trade-offs.
- Do not write code or create change artifacts while exploring.
- When the direction is clear, suggest `/opsx:new` to start a change."""

_NEW = """Start a new change.

1. Derive a kebab-case change name from the request (ask if it is unclear).
2. Run `openspec new change "<name>"`.
3. Run `openspec status --change "<name>"` and show which artifact comes first.
4. Stop. Do not create artifacts yet; `/opsx:continue` does that."""

_CONTINUE = """Continue an in-progress change by creating its next artifact.

1. Pick the change (ask if more than one is active).
2. Run `openspec status --change "<name>" --json` to find the first ready artifact.
3. Run `openspec instructions <artifact> --change "<name>"` and follow them.
4. Write exactly one artifact, then report what is unlocked next."""

_APPLY = """Implement the tasks of a change.

1. Read `tasks.md` and the change's proposal, design and delta specs.
2. Work through unchecked tasks in order; keep each edit minimal and focused.
3. Mark each task `- [x]` as soon as it is done.
4. Pause and ask when a task is ambiguous or the design looks wrong."""

_FF = """Fast-forward a change: create every remaining artifact in dependency order.

1. Run `openspec status --change "<name>" --json`.
2. For each artifact that is not done, fetch its instructions and write it.
3. Re-check status after each artifact; stop once the change is ready to apply."""

_SYNC = """Sync delta specs from a change into the main specs.

1. Find delta specs under `openspec/changes/<name>/specs/`.
2. For each capability apply ADDED, MODIFIED, REMOVED and RENAMED requirements to `openspec/specs/<capability>/spec.md`.
3. Preserve existing requirements the delta does not mention.
4. Summarize every capability you touched."""

_ARCHIVE = """Archive a completed change.

1. Confirm every task in `tasks.md` is checked; warn about any that are not.
2. Offer to sync delta specs first if they have not been synced.
3. Move the change to `openspec/changes/archive/YYYY-MM-DD-<name>/`.
4. Report the archive location."""

_BULK_ARCHIVE = """Archive several completed changes at once.

1. List active changes with `openspec list --json`.
2. Let the user pick which to archive; flag changes with open tasks.
3. When two changes touch the same capability, sync them in creation order.
4. Archive each selected change and summarize the results."""

_VERIFY = """Verify that an implementation matches its change artifacts.

- Completeness: every task checked, every requirement implemented.
- Correctness: each scenario in the delta specs holds in the code.
- Coherence: the implementation follows the decisions in `design.md`.

Report issues as CRITICAL, WARNING or SUGGESTION with file references."""


def _skill(name: str, description: str, instructions: str) -> SkillTemplate:
    return SkillTemplate(name=name, description=description, instructions=instructions)


def _command(name: str, description: str, tags: tuple[str, ...], content: str) -> CommandTemplate:
    return CommandTemplate(
        name=name,
        description=description,
        category=DEFAULT_CATEGORY,
        tags=tags,
        content=content,
    )


def get_explore_skill_template() -> SkillTemplate:
    return _skill(
        "openspec-explore",
        "Think through ideas and requirements before starting a change.",
        _EXPLORE,
    )


def get_new_change_skill_template() -> SkillTemplate:
    return _skill("openspec-new-change", "Start a new OpenSpec change.", _NEW)


def get_continue_change_skill_template() -> SkillTemplate:
    return _skill(
        "openspec-continue-change",
        "Create the next artifact of an in-progress change.",
        _CONTINUE,
    )


def get_apply_change_skill_template() -> SkillTemplate:
    return _skill("openspec-apply-change", "Implement the tasks of a change.", _APPLY)


def get_ff_change_skill_template() -> SkillTemplate:
    return _skill(
        "openspec-ff-change",
        "Create all remaining artifacts of a change in one go.",
        _FF,
    )


def get_sync_specs_skill_template() -> SkillTemplate:
    return _skill("openspec-sync-specs", "Sync delta specs into the main specs.", _SYNC)


def get_archive_change_skill_template() -> SkillTemplate:
    return _skill("openspec-archive-change", "Archive a completed change.", _ARCHIVE)


def get_bulk_archive_change_skill_template() -> SkillTemplate:
    return _skill(
        "openspec-bulk-archive-change",
        "Archive several completed changes at once.",
        _BULK_ARCHIVE,
    )


def get_verify_change_skill_template() -> SkillTemplate:
    return _skill(
        "openspec-verify-change",
        "Check that an implementation matches its change artifacts.",
        _VERIFY,
    )


def get_opsx_explore_command_template() -> CommandTemplate:
    return _command(
        "OPSX: Explore",
        "Enter explore mode to think through a problem before changing anything",
        ("workflow", "explore", "experimental", "thinking"),
        _EXPLORE,
    )


def get_opsx_new_command_template() -> CommandTemplate:
    return _command(
        "OPSX: New",
        "Start a new change",
        ("workflow", "artifacts", "experimental"),
        _NEW,
    )


def get_opsx_continue_command_template() -> CommandTemplate:
    return _command(
        "OPSX: Continue",
        "Continue working on a change by creating its next artifact",
        ("workflow", "artifacts", "experimental"),
        _CONTINUE,
    )


def get_opsx_apply_command_template() -> CommandTemplate:
    return _command(
        "OPSX: Apply",
        "Implement the tasks of a change",
        ("workflow", "artifacts", "experimental"),
        _APPLY,
    )


def get_opsx_ff_command_template() -> CommandTemplate:
    return _command(
        "OPSX: Fast Forward",
        "Create every remaining artifact of a change",
        ("workflow", "artifacts", "experimental"),
        _FF,
    )


def get_opsx_sync_command_template() -> CommandTemplate:
    return _command(
        "OPSX: Sync",
        "Sync delta specs from a change into the main specs",
        ("workflow", "specs", "experimental"),
        _SYNC,
    )


def get_opsx_archive_command_template() -> CommandTemplate:
    return _command(
        "OPSX: Archive",
        "Archive a completed change",
        ("workflow", "archive", "experimental"),
        _ARCHIVE,
    )


def get_opsx_bulk_archive_command_template() -> CommandTemplate:
    return _command(
        "OPSX: Bulk Archive",
        "Archive several completed changes at once",
        ("workflow", "archive", "experimental", "bulk"),
        _BULK_ARCHIVE,
    )


def get_opsx_verify_command_template() -> CommandTemplate:
    return _command(
        "OPSX: Verify",
        "Verify that an implementation matches its change artifacts",
        ("workflow", "verify", "experimental"),
        _VERIFY,
    )
