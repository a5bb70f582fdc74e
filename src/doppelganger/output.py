"""
Output collaborators: console printer and CSV export.

Presentation only. The console printer honors the presentation filters;
the CSV export always contains every candidate.
"""

import csv
from collections.abc import Iterable
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from .aggregator import ResultSet
from .config import FilterConfig
from .exceptions import OutputError
from .models import Candidate

CSV_COLUMNS = ["unicode", "ascii", "status", "ips", "names"]
WHOIS_COLUMNS = ["registrar", "created_at", "updated_at", "expires_at", "nameservers"]

console = Console()
err_console = Console(stderr=True)


def csv_header(show_whois: bool = False) -> list[str]:
    if show_whois:
        return CSV_COLUMNS + WHOIS_COLUMNS
    return list(CSV_COLUMNS)


def build_csv_row(candidate: Candidate, show_whois: bool = False) -> list[str]:
    """One CSV row; list values are comma-joined, missing whois values empty."""
    row = [
        candidate.domain,
        candidate.ascii,
        candidate.status.value,
        ",".join(candidate.addresses),
        ",".join(candidate.names),
    ]
    if show_whois:
        record = candidate.whois
        if record is None:
            row.extend([""] * len(WHOIS_COLUMNS))
        else:
            row.extend([
                record.registrar,
                record.created,
                record.updated,
                record.expires,
                ",".join(record.name_servers),
            ])
    return row


def write_csv(path: Path, candidates: Iterable[Candidate], show_whois: bool = False) -> int:
    """
    Write all candidates to a CSV file.

    Returns:
        Number of data rows written

    Raises:
        OutputError: If the file cannot be created or written
    """
    rows = 0
    try:
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(csv_header(show_whois))
            for candidate in candidates:
                writer.writerow(build_csv_row(candidate, show_whois))
                rows += 1
    except OSError as e:
        raise OutputError(
            code="csv_write_failed",
            message=f"Cannot write {path}: {e}",
            details={"path": str(path)},
        )
    return rows


def read_csv(path: Path) -> list[dict[str, str]]:
    """Read a CSV export back as a list of row dicts."""
    try:
        with open(path, newline="", encoding="utf-8") as f:
            return list(csv.DictReader(f))
    except OSError as e:
        raise OutputError(
            code="csv_read_failed",
            message=f"Cannot read {path}: {e}",
            details={"path": str(path)},
        )


def format_candidate(candidate: Candidate, show_whois: bool = False) -> list[str]:
    """
    Rich markup lines for one candidate.

    Available:   ``domain (ascii) : available``
    Registered:  ``domain (ascii) registered : ips=... names=...`` followed
    by indented whois fields when requested.
    """
    head = f"{escape(candidate.domain)} ({escape(candidate.ascii)})"
    if candidate.available:
        return [f"{head} : [green]available[/green]"]

    main_fields = []
    if candidate.addresses:
        main_fields.append(f"ips={','.join(candidate.addresses)}")
        if candidate.names:
            main_fields.append(f"names={escape(','.join(candidate.names))}")

    line = f"{head} [red]registered[/red]"
    if main_fields:
        line += " : " + " ".join(main_fields)
    lines = [line]

    if show_whois and candidate.whois is not None:
        record = candidate.whois
        lines.extend([
            f"  registrar={escape(record.registrar)}",
            f"  created={escape(record.created)}",
            f"  updated={escape(record.updated)}",
            f"  expires={escape(record.expires)}",
            f"  ns={escape(','.join(record.name_servers))}",
        ])
    return lines


def print_results(
    results: ResultSet,
    filters: Optional[FilterConfig] = None,
    show_whois: bool = False,
    out: Optional[Console] = None,
) -> int:
    """
    Print the candidates passing the filters, in generation order.

    Returns:
        Number of candidates printed
    """
    filters = filters or FilterConfig()
    out = out or console
    shown = results.filtered(
        available_only=filters.available_only,
        registered_only=filters.registered_only,
        live_only=filters.live_only,
    )
    for candidate in shown:
        for line in format_candidate(candidate, show_whois):
            out.print(line, highlight=False, soft_wrap=True)
    return len(shown)
