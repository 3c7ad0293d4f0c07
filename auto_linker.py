#!/usr/bin/env python3
from __future__ import annotations

"""
Obsidian Vault Auto-Linker

Turns plain-text mentions of note names into [[wikilinks]]. The vocabulary is
whatever the vault already links to, so a name becomes linkable as soon as any
note links to it once. Also removes chosen links from a folder and reverts the
most recent linking run.

Usage:
    # Link a single note
    auto-linker --vault-path "/path/to/vault" link "Journal/Trip.md"

    # Link every note under a folder
    auto-linker --vault-path "/path/to/vault" --directory "Journal" extend

    # Undo the last linking run
    auto-linker --vault-path "/path/to/vault" undo
"""

import argparse
import json
import logging
import re
import sys
from dataclasses import dataclass, field
from datetime import datetime
from functools import partial
from pathlib import Path, PurePosixPath
from typing import Callable, Iterable, Iterator, Optional, Protocol, Union

NOTE_EXTENSION = "md"
LEDGER_FILENAME = ".auto-linker-undo.json"

# ---------------------------------------------------------------------------
# Data Structures
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Document:
    path: str                                       # vault-relative, posix separators

    @property
    def basename(self) -> str:
        return PurePosixPath(self.path).stem

    @property
    def extension(self) -> str:
        return PurePosixPath(self.path).suffix[1:]


@dataclass(frozen=True)
class Folder:
    path: str                                       # "" is the vault root


Entry = Union[Document, Folder]


@dataclass(frozen=True)
class Section:
    text: str
    is_heading: bool = False


@dataclass
class ChangeRecord:
    document: Document
    original: str                                   # content before the run touched it
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())


@dataclass
class RunReport:
    processed: int = 0
    modified: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

# Keys as stored by the Obsidian plugin in its data.json
SETTINGS_KEYS = {
    "existingFilesOnly": "existing_files_only",
    "specifiedDirectory": "specified_directory",
    "excludedBlocks": "excluded_blocks",
    "blacklistedStrings": "blacklisted_strings",
    "whitelistedStrings": "whitelisted_strings",
    "linksToRemove": "links_to_remove",
    "debugMode": "debug_mode",
}


class SettingsError(ValueError):
    """Raised when a settings file cannot be parsed."""


@dataclass
class LinkerSettings:
    existing_files_only: bool = False
    specified_directory: str = ""
    excluded_blocks: str = ""
    blacklisted_strings: str = ""
    whitelisted_strings: str = ""
    links_to_remove: str = ""
    debug_mode: bool = False


def load_settings(path: Optional[Path]) -> LinkerSettings:
    """Load plugin settings from a JSON file, falling back to defaults.

    Unknown keys are ignored and missing keys keep their default value.
    """
    settings = LinkerSettings()
    if path is None:
        return settings
    if not path.exists():
        logging.warning(f"Settings file not found, using defaults: {path}")
        return settings

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise SettingsError(f"Could not parse settings file {path}: {e}") from e
    if not isinstance(data, dict):
        raise SettingsError(f"Settings file {path} must contain a JSON object")

    for key, attr in SETTINGS_KEYS.items():
        value = data.get(key)
        if value is None:
            continue
        expected = type(getattr(settings, attr))
        if not isinstance(value, expected):
            raise SettingsError(
                f"Setting '{key}' in {path} must be a {expected.__name__}, got {value!r}"
            )
        setattr(settings, attr, value)
    return settings


def parse_list(value: str, lower: bool = True) -> list[str]:
    """Split a comma-separated setting into trimmed, non-empty entries."""
    items = []
    for item in value.split(","):
        item = item.strip()
        if not item:
            continue
        items.append(item.lower() if lower else item)
    return items


@dataclass(frozen=True)
class FilterRules:
    excluded_blocks: frozenset[str] = frozenset()
    blacklist: frozenset[str] = frozenset()
    whitelist: frozenset[str] = frozenset()

    @classmethod
    def from_settings(cls, settings: LinkerSettings) -> FilterRules:
        return cls(
            excluded_blocks=frozenset(parse_list(settings.excluded_blocks)),
            blacklist=frozenset(parse_list(settings.blacklisted_strings)),
            whitelist=frozenset(parse_list(settings.whitelisted_strings)),
        )


# ---------------------------------------------------------------------------
# Document Store
# ---------------------------------------------------------------------------

class DocumentStore(Protocol):
    def root(self) -> Folder: ...

    def read_text(self, document: Document) -> str: ...

    def write_text(self, document: Document, text: str) -> None: ...

    def list_children(self, folder: Folder) -> list[Entry]: ...

    def resolve(self, path: str) -> Optional[Entry]: ...


class FileVault:
    """An Obsidian vault on the local file system."""

    def __init__(self, vault_path: Path) -> None:
        self.vault_path = vault_path

    def root(self) -> Folder:
        return Folder("")

    def _abspath(self, entry: Entry) -> Path:
        return self.vault_path / entry.path if entry.path else self.vault_path

    def read_text(self, document: Document) -> str:
        # newline="" keeps \r\n intact so undo restores the exact bytes
        with open(self._abspath(document), encoding="utf-8", newline="") as f:
            return f.read()

    def write_text(self, document: Document, text: str) -> None:
        with open(self._abspath(document), "w", encoding="utf-8", newline="") as f:
            f.write(text)

    def list_children(self, folder: Folder) -> list[Entry]:
        children: list[Entry] = []
        for child in sorted(self._abspath(folder).iterdir()):
            # .obsidian, .trash and our own undo ledger
            if child.name.startswith("."):
                continue
            rel = child.relative_to(self.vault_path).as_posix()
            # A linked folder can point back at one of its parents
            if child.is_symlink() and child.is_dir():
                logging.debug(f"Skipping linked folder: {rel}")
                continue
            if child.is_dir():
                children.append(Folder(rel))
            elif child.is_file():
                children.append(Document(rel))
        return children

    def resolve(self, path: str) -> Optional[Entry]:
        rel = PurePosixPath(path.replace("\\", "/").strip().strip("/"))
        if ".." in rel.parts:
            return None
        key = rel.as_posix()
        if key in ("", "."):
            return self.root()
        target = self.vault_path / key
        if target.is_dir():
            return Folder(key)
        if target.is_file():
            return Document(key)
        return None


# ---------------------------------------------------------------------------
# Phase 1: Vocabulary Discovery
# ---------------------------------------------------------------------------

WIKILINK_PATTERN = re.compile(r'\[\[([^\]]+)\]\]')


def extract_links(text: str) -> Iterator[str]:
    """Yield the targets of every [[wikilink]] in a note, in order of appearance.

    Aliases ([[Target|Alias]]) and heading anchors ([[Target#Heading]]) are
    dropped. Targets with a file extension other than .md point at
    attachments and are skipped; a trailing .md is removed.
    """
    for match in WIKILINK_PATTERN.finditer(text):
        target = match.group(1).split("|")[0].split("#")[0].strip()
        if target.endswith(f".{NOTE_EXTENSION}"):
            target = target[: -len(NOTE_EXTENSION) - 1].rstrip()
        elif "." in target:
            continue
        if target:
            yield target


def iter_documents(store: DocumentStore, folder: Folder) -> Iterator[Document]:
    """Walk a folder depth-first and yield every markdown document."""
    try:
        children = store.list_children(folder)
    except OSError as e:
        logging.warning(f"Could not list {folder.path or '/'}: {e}")
        return
    for child in children:
        if isinstance(child, Folder):
            yield from iter_documents(store, child)
        elif child.extension == NOTE_EXTENSION:
            yield child


def collect_vocabulary(
    store: DocumentStore,
    documents: Iterable[Document],
    notify: Optional[Callable[[str], None]] = None,
) -> list[str]:
    """Union the link targets of all documents into one vocabulary.

    Terms are unique case-insensitively; the first spelling seen is kept.
    """
    vocabulary: dict[str, str] = {}
    for document in documents:
        try:
            text = store.read_text(document)
        except (UnicodeDecodeError, OSError) as e:
            logging.warning(f"Could not read {document.path}: {e}")
            if notify is not None:
                notify(f"Failed to read file: {document.path}")
            continue
        for target in extract_links(text):
            vocabulary.setdefault(target.lower(), target)
    logging.debug(f"Vocabulary holds {len(vocabulary)} terms")
    return list(vocabulary.values())


def scan_vault(store: DocumentStore, notify: Optional[Callable[[str], None]] = None) -> list[str]:
    return collect_vocabulary(store, iter_documents(store, store.root()), notify)


# ---------------------------------------------------------------------------
# Phase 2: Term Filtering
# ---------------------------------------------------------------------------

def is_linkable(term: str, rules: FilterRules) -> bool:
    """A blacklisted term is never linked, even when it is also whitelisted."""
    key = term.lower()
    if key in rules.blacklist:
        return False
    return not rules.whitelist or key in rules.whitelist


def filter_vocabulary(vocabulary: Iterable[str], rules: FilterRules) -> list[str]:
    if not rules.whitelist:
        return list(vocabulary)
    return [term for term in vocabulary if term.lower() in rules.whitelist]


# ---------------------------------------------------------------------------
# Phase 3: Section-Aware Linking
# ---------------------------------------------------------------------------

HEADING_PATTERN = re.compile(r'^(#.*)$', re.MULTILINE)


def split_sections(text: str) -> list[Section]:
    """Split text into alternating body chunks and heading lines.

    The split keeps every character, so join_sections() reverses it.
    """
    parts = HEADING_PATTERN.split(text)
    # re.split puts captured headings at the odd indices
    return [Section(part, is_heading=i % 2 == 1) for i, part in enumerate(parts)]


def join_sections(sections: Iterable[Section]) -> str:
    return "".join(section.text for section in sections)


def is_excluded_heading(heading: str, excluded_blocks: Iterable[str]) -> bool:
    lowered = heading.lower()
    return any(block in lowered for block in excluded_blocks)


def link_pattern(term: str) -> re.Pattern:
    return re.compile(r'(?<!\[\[)\b(' + re.escape(term) + r')\b(?!\]\])', re.IGNORECASE)


def _overlaps(start: int, end: int, spans: list[tuple[int, int]]) -> bool:
    return any(start < span_end and end > span_start for span_start, span_end in spans)


def link_section(
    text: str,
    words: Iterable[str],
    rules: FilterRules,
    exists: Optional[Callable[[str], bool]] = None,
) -> str:
    """Wrap every mention of each word in [[...]], one word after another.

    Mentions already inside a wikilink are left alone, so earlier words win
    over later words that overlap them.
    """
    for word in words:
        if not is_linkable(word, rules):
            logging.debug(f"Skipping filtered term: {word}")
            continue

        existing = [m.span() for m in WIKILINK_PATTERN.finditer(text)]

        def wrap(match: re.Match) -> str:
            matched = match.group(0)
            if _overlaps(match.start(), match.end(), existing):
                return matched
            if exists is not None and not exists(matched):
                logging.debug(f"No note named '{matched}', leaving it unlinked")
                return matched
            return f"[[{matched}]]"

        text = link_pattern(word).sub(wrap, text)
    return text


def link_words(
    text: str,
    words: list[str],
    rules: FilterRules,
    exists: Optional[Callable[[str], bool]] = None,
) -> str:
    """Link vocabulary words in a note, skipping headings and excluded sections."""
    if not words:
        return text

    sections = []
    excluded = False
    for section in split_sections(text):
        if section.is_heading:
            excluded = is_excluded_heading(section.text, rules.excluded_blocks)
            if excluded:
                logging.debug(f"Excluded section: {section.text.strip()}")
        elif not excluded and section.text:
            section = Section(link_section(section.text, words, rules, exists))
        sections.append(section)
    return join_sections(sections)


# ---------------------------------------------------------------------------
# Existing-Target Validation
# ---------------------------------------------------------------------------

def canonical_note_path(name: str) -> str:
    if name.endswith(f".{NOTE_EXTENSION}"):
        name = name[: -len(NOTE_EXTENSION) - 1]
    return f"{name}.{NOTE_EXTENSION}"


def document_exists(store: DocumentStore, name: str) -> bool:
    return isinstance(store.resolve(canonical_note_path(name)), Document)


# ---------------------------------------------------------------------------
# Link Removal
# ---------------------------------------------------------------------------

def removal_pattern(link: str) -> re.Pattern:
    return re.compile(r'\[\[(' + re.escape(link) + r')(?:\|([^\]]*))?\]\]', re.IGNORECASE)


def _unwrap(match: re.Match) -> str:
    # [[Target|Alias]] reads as "Alias" in the rendered note
    return match.group(2) or match.group(1)


def remove_links(text: str, links: Iterable[str]) -> str:
    """Replace [[Link]] and [[Link|Alias]] with their visible text."""
    for link in links:
        text = removal_pattern(link).sub(_unwrap, text)
    return text


# ---------------------------------------------------------------------------
# Change Ledger
# ---------------------------------------------------------------------------

class EmptyLedgerError(Exception):
    """Raised when undo is requested and no linking run has been recorded."""


class ChangeLedger:
    """Original content of every document touched by the latest linking run."""

    def __init__(self, records: Optional[list[ChangeRecord]] = None) -> None:
        self.records: list[ChangeRecord] = list(records or [])

    def __len__(self) -> int:
        return len(self.records)

    def begin_run(self) -> None:
        self.records.clear()

    def record(self, document: Document, original: str, updated: Optional[str] = None) -> bool:
        if updated is not None and updated == original:
            return False
        # The first snapshot of a run is the pre-run content
        if any(r.document == document for r in self.records):
            return False
        self.records.append(ChangeRecord(document=document, original=original))
        return True

    def undo(self, store: DocumentStore) -> RunReport:
        if not self.records:
            raise EmptyLedgerError("No changes to undo")

        report = RunReport()
        pending = []
        for change in self.records:
            report.processed += 1
            try:
                store.write_text(change.document, change.original)
                report.modified.append(change.document.path)
            except OSError as e:
                logging.error(f"Failed to restore {change.document.path}: {e}")
                report.failed.append(change.document.path)
                pending.append(change)
        # Failed restores stay recorded so undo can be retried
        self.records = pending
        return report

    def save(self, path: Path) -> None:
        entries = [
            {"file": r.document.path, "original": r.original, "timestamp": r.timestamp}
            for r in self.records
        ]
        with open(path, "w", encoding="utf-8") as f:
            json.dump(entries, f, indent=2)

    @classmethod
    def load(cls, path: Path) -> ChangeLedger:
        if not path.exists():
            return cls()
        with open(path, encoding="utf-8") as f:
            entries = json.load(f)
        try:
            records = [
                ChangeRecord(Document(e["file"]), e["original"], e.get("timestamp", ""))
                for e in entries
            ]
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed undo ledger {path}: {e}") from e
        return cls(records)


# ---------------------------------------------------------------------------
# Auto-Linker
# ---------------------------------------------------------------------------

def _log_notice(message: str) -> None:
    logging.info(message)


class AutoLinker:
    """Runs the linking, removal and undo commands against a document store."""

    def __init__(
        self,
        store: DocumentStore,
        settings: Optional[LinkerSettings] = None,
        ledger: Optional[ChangeLedger] = None,
        notify: Optional[Callable[[str], None]] = None,
        confirm: Optional[Callable[[str], bool]] = None,
        dry_run: bool = False,
    ) -> None:
        self.store = store
        self.settings = settings or LinkerSettings()
        self.ledger = ledger if ledger is not None else ChangeLedger()
        self.notify = notify or _log_notice
        self.confirm = confirm or (lambda message: True)
        self.dry_run = dry_run

    @property
    def rules(self) -> FilterRules:
        return FilterRules.from_settings(self.settings)

    @property
    def directory_label(self) -> str:
        return self.settings.specified_directory or "/"

    def words_to_link(self) -> list[str]:
        """Rebuild the vocabulary from the vault and apply the whitelist."""
        words = filter_vocabulary(scan_vault(self.store, self.notify), self.rules)
        logging.debug(f"{len(words)} words to link")
        return words

    def link_document(
        self,
        document: Document,
        words: Optional[list[str]] = None,
        report: Optional[RunReport] = None,
    ) -> bool:
        """Link one document. Returns True if its content changed."""
        report = report if report is not None else RunReport()
        report.processed += 1
        if words is None:
            words = self.words_to_link()
        exists = None
        if self.settings.existing_files_only:
            exists = partial(document_exists, self.store)

        try:
            content = self.store.read_text(document)
            linked = link_words(content, words, self.rules, exists)
            if linked == content:
                logging.debug(f"No changes made to {document.path}")
                return False
            if self.dry_run:
                logging.info(f"Would modify: {document.path}")
            else:
                self.ledger.record(document, content, linked)
                self.store.write_text(document, linked)
                logging.debug(f"Modified: {document.path}")
        except (UnicodeDecodeError, OSError) as e:
            logging.error(f"Failed to auto-link {document.path}: {e}")
            self.notify(f"Failed to auto-link file: {document.path}")
            report.failed.append(document.path)
            return False

        report.modified.append(document.path)
        return True

    def link_current_file(self, document: Optional[Document]) -> Optional[RunReport]:
        if document is None or document.extension != NOTE_EXTENSION:
            self.notify("No active Markdown file to auto-link")
            return None

        if not self.dry_run:
            self.ledger.begin_run()
        report = RunReport()
        self.link_document(document, report=report)
        if not report.failed:
            self.notify(f"Auto-linking completed for {document.basename}")
        return report

    def _specified_folder(self) -> Optional[Folder]:
        directory = self.store.resolve(self.settings.specified_directory)
        if not isinstance(directory, Folder):
            self.notify("Invalid directory specified")
            return None
        return directory

    def extend_linking_to_directory(self) -> Optional[RunReport]:
        folder = self._specified_folder()
        if folder is None:
            return None
        if not self.dry_run and not self.confirm(
            "Are you sure you wish to add links to the chosen directory?"
        ):
            self.notify("Linking cancelled")
            return None

        if not self.dry_run:
            self.ledger.begin_run()
        logging.info("Building vocabulary...")
        words = self.words_to_link()

        report = RunReport()
        for document in iter_documents(self.store, folder):
            self.link_document(document, words, report)

        self.notify(f"Linking extended to {report.processed} files in {self.directory_label}")
        return report

    def remove_links_from_directory(self) -> Optional[RunReport]:
        folder = self._specified_folder()
        if folder is None:
            return None
        links = parse_list(self.settings.links_to_remove, lower=False)
        if not links:
            self.notify("No links specified for removal")
            return None
        if not self.dry_run and not self.confirm(
            "Are you sure you want to remove these links from the chosen directory?"
        ):
            self.notify("Link removal cancelled")
            return None

        report = RunReport()
        for document in iter_documents(self.store, folder):
            report.processed += 1
            try:
                content = self.store.read_text(document)
                updated = remove_links(content, links)
                if updated == content:
                    continue
                if self.dry_run:
                    logging.info(f"Would modify: {document.path}")
                else:
                    self.store.write_text(document, updated)
            except (UnicodeDecodeError, OSError) as e:
                logging.error(f"Failed to remove links from {document.path}: {e}")
                self.notify(f"Failed to remove links from file: {document.path}")
                report.failed.append(document.path)
                continue
            report.modified.append(document.path)

        self.notify(f"Removed links from {len(report.modified)} file(s) in {self.directory_label}")
        return report

    def undo_last_changes(self) -> Optional[RunReport]:
        try:
            report = self.ledger.undo(self.store)
        except EmptyLedgerError:
            self.notify("No changes to undo")
            return None

        for path in report.failed:
            self.notify(f"Failed to undo changes in file: {path}")
        self.notify(f"Undid changes in {len(report.modified)} file(s)")
        return report


# ---------------------------------------------------------------------------
# Command Line
# ---------------------------------------------------------------------------

def prompt_confirm(message: str) -> bool:
    try:
        answer = input(f"  {message} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def print_notice(message: str) -> None:
    print(f"  {message}")


def print_report(report: RunReport) -> None:
    print(f"    Files processed: {report.processed}")
    print(f"    Files modified: {len(report.modified)}")
    print(f"    Errors: {len(report.failed)}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="auto-linker",
        description="Obsidian Vault Auto-Linker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show the words that would be linked
  auto-linker --vault-path "/path/to/vault" vocab

  # Link one note, only to notes that exist
  auto-linker --vault-path "/path/to/vault" --existing-files-only link "Journal/Trip.md"

  # Link a folder, skipping "Tasks" sections
  auto-linker --vault-path "/path/to/vault" --directory Journal --excluded-blocks Tasks extend

  # Remove links to Paris from a folder
  auto-linker --vault-path "/path/to/vault" --directory Journal --links-to-remove Paris remove
        """,
    )
    parser.add_argument("--vault-path", required=True, type=Path, help="Path to the Obsidian vault root")
    parser.add_argument("--settings", type=Path, default=None, help="Plugin settings JSON (data.json)")
    parser.add_argument("--ledger", type=Path, default=None,
                        help=f"Undo ledger file (default: <vault>/{LEDGER_FILENAME})")
    parser.add_argument("--existing-files-only", action="store_true", default=None,
                        help="Only link words that name an existing note")
    parser.add_argument("--directory", default=None, help="Folder for extend/remove (vault-relative)")
    parser.add_argument("--excluded-blocks", default=None, help="Comma-separated headings whose sections are skipped")
    parser.add_argument("--blacklist", default=None, help="Comma-separated words never to link")
    parser.add_argument("--whitelist", default=None, help="Comma-separated words to link exclusively")
    parser.add_argument("--links-to-remove", default=None, help="Comma-separated links for 'remove'")
    parser.add_argument("--debug", action="store_true", default=None, help="Verbose diagnostic output")
    parser.add_argument("--dry-run", action="store_true", help="Report changes without writing files")
    parser.add_argument("--yes", action="store_true", help="Do not ask for confirmation")

    commands = parser.add_subparsers(dest="command", required=True)
    link = commands.add_parser("link", help="Auto-link a single note")
    link.add_argument("note", help="Vault-relative path of the note")
    commands.add_parser("extend", help="Auto-link every note in the specified directory")
    commands.add_parser("remove", help="Remove links from every note in the specified directory")
    commands.add_parser("undo", help="Revert the last linking run")
    commands.add_parser("vocab", help="List the words that would be linked")
    return parser


def apply_overrides(settings: LinkerSettings, args: argparse.Namespace) -> LinkerSettings:
    overrides = {
        "existing_files_only": args.existing_files_only,
        "specified_directory": args.directory,
        "excluded_blocks": args.excluded_blocks,
        "blacklisted_strings": args.blacklist,
        "whitelisted_strings": args.whitelist,
        "links_to_remove": args.links_to_remove,
        "debug_mode": args.debug,
    }
    for attr, value in overrides.items():
        if value is not None:
            setattr(settings, attr, value)
    return settings


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # Configure before loading settings so their warnings use this format
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    try:
        settings = apply_overrides(load_settings(args.settings), args)
    except SettingsError as e:
        print(f"Error: {e}")
        return 1

    log_level = logging.DEBUG if settings.debug_mode else logging.INFO
    logging.getLogger().setLevel(log_level)

    if not args.vault_path.is_dir():
        print(f"Error: Vault path does not exist: {args.vault_path}")
        return 1

    ledger_path = args.ledger or args.vault_path / LEDGER_FILENAME
    try:
        ledger = ChangeLedger.load(ledger_path)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    store = FileVault(args.vault_path)
    linker = AutoLinker(
        store,
        settings,
        ledger=ledger,
        notify=print_notice,
        confirm=(lambda message: True) if args.yes else prompt_confirm,
        dry_run=args.dry_run,
    )

    report = None
    if args.command == "vocab":
        for word in linker.words_to_link():
            print(word)
    elif args.command == "link":
        entry = store.resolve(args.note)
        report = linker.link_current_file(entry if isinstance(entry, Document) else None)
    elif args.command == "extend":
        report = linker.extend_linking_to_directory()
    elif args.command == "remove":
        report = linker.remove_links_from_directory()
    elif args.command == "undo":
        report = linker.undo_last_changes()

    if report is not None and args.command != "undo":
        print_report(report)
    if args.command in ("link", "extend", "undo") and not args.dry_run:
        ledger.save(ledger_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
