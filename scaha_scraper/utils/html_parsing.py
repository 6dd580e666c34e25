"""
Shared HTML / DOM-specific parsing utilities for the extractors.

Contains helpers that depend on BeautifulSoup. Generic data-type
conversion (ints, floats, scores) lives in parsing.py.
"""

from __future__ import annotations

from typing import Iterator

from bs4 import BeautifulSoup, Tag


def parse_html(html: str) -> BeautifulSoup:
    """Parse a full page or a partial-response fragment."""
    return BeautifulSoup(html, "lxml")


def cell_texts(row: Tag) -> list[str]:
    """Return the stripped text of every <td> in a row."""
    return [cell.get_text(" ", strip=True) for cell in row.find_all("td")]


def iter_data_rows(root: BeautifulSoup | Tag) -> Iterator[list[str]]:
    """Yield the <td> texts of every row under root that has data cells.

    Header rows made only of <th> cells yield nothing. Rows are read with
    or without a <tbody>, since the lxml parser does not synthesize one.
    """
    for row in root.find_all("tr"):
        cells = cell_texts(row)
        if cells:
            yield cells


def find_table_by_id(soup: BeautifulSoup, table_id: str) -> Tag | None:
    """Find a table by its exact ID.

    Args:
        soup: BeautifulSoup document
        table_id: Table ID to search for

    Returns:
        Table Tag if found, None otherwise
    """
    return soup.find("table", id=table_id)


def header_text(table: Tag) -> str:
    """Lower-cased text of a table's header cells."""
    headers = table.find_all("th")
    return " ".join(th.get_text(" ", strip=True).lower() for th in headers)


def find_table_by_headers(soup: BeautifulSoup, *keywords: str) -> Tag | None:
    """Find the first table whose header mentions every keyword (case-insensitive)."""
    wanted = [keyword.lower() for keyword in keywords]
    for table in soup.find_all("table"):
        text = header_text(table)
        if text and all(keyword in text for keyword in wanted):
            return table
    return None


def get_table_ids_on_page(soup: BeautifulSoup, limit: int = 15) -> list[str]:
    """Get all table IDs found on a page (for debugging)."""
    all_tables = soup.find_all("table")
    return [t.get("id", "no-id") for t in all_tables[:limit]]
