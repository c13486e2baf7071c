"""JaCoCo XML report parser.

Only the per-line data of <sourcefile> elements is read; class, method and
aggregate counters are ignored.

Structure:
<report name="...">
  <group name="module">                      (optional, may nest)
    <package name="com/example">
      <class .../>
      <sourcefile name="Foo.java">
        <line nr="3" mi="0" ci="4" mb="0" cb="0"/>
        <line nr="5" mi="1" ci="2" mb="1" cb="1"/>
      </sourcefile>
    </package>
  </group>
</report>
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

from covimport.core.errors import ReportUnreadableError
from covimport.coverage.models import LineCoverage, Report, SourceFileRecord

_COUNTERS = ("mi", "ci", "mb", "cb")


def parse_report(path: Path) -> Report:
    """Parse a JaCoCo XML report into its source file records.

    Records keep document order.

    Raises:
        ReportUnreadableError: If the file cannot be read or is not a valid
            JaCoCo XML report.
    """
    if not path.is_file():
        raise ReportUnreadableError.not_found(str(path))

    try:
        tree = ET.parse(path)
    except ET.ParseError as e:
        raise ReportUnreadableError.malformed(str(path), str(e)) from e
    except OSError as e:
        raise ReportUnreadableError.io_error(str(path), str(e)) from e

    root = tree.getroot()
    if root.tag != "report":
        raise ReportUnreadableError.invalid_content(
            str(path), f"expected <report> root element, found <{root.tag}>"
        )

    source_files: list[SourceFileRecord] = []
    for package in root.iter("package"):
        package_name = package.get("name", "").strip("/")
        for sourcefile in package.findall("sourcefile"):
            file_name = sourcefile.get("name", "")
            if not file_name:
                raise ReportUnreadableError.invalid_content(
                    str(path), f"<sourcefile> without a name in package '{package_name}'"
                )
            lines = _parse_lines(path, f"{package_name}/{file_name}", sourcefile)
            source_files.append(
                SourceFileRecord(package_name=package_name, file_name=file_name, lines=lines)
            )

    return Report(location=path, source_files=tuple(source_files))


def _parse_lines(path: Path, source: str, sourcefile: ET.Element) -> dict[int, LineCoverage]:
    lines: dict[int, LineCoverage] = {}
    last_nr = 0
    for line in sourcefile.findall("line"):
        nr = _int_attr(path, source, line, "nr")
        if nr == 0:
            raise ReportUnreadableError.invalid_content(
                str(path), f"line number 0 in {source} (lines are 1-based)"
            )
        if nr <= last_nr:
            raise ReportUnreadableError.invalid_content(
                str(path), f"line numbers of {source} not strictly increasing at line {nr}"
            )
        mi, ci, mb, cb = (_int_attr(path, source, line, name) for name in _COUNTERS)
        lines[nr] = LineCoverage(
            line=nr,
            covered_instructions=ci,
            missed_instructions=mi,
            covered_branches=cb,
            missed_branches=mb,
        )
        last_nr = nr
    return lines


def _int_attr(path: Path, source: str, element: ET.Element, name: str) -> int:
    raw = element.get(name)
    if raw is None:
        raise ReportUnreadableError.invalid_content(
            str(path), f"missing attribute '{name}' on <line> of {source}"
        )
    try:
        value = int(raw)
    except ValueError:
        value = -1
    if value < 0:
        raise ReportUnreadableError.invalid_content(
            str(path), f"invalid value '{raw}' for attribute '{name}' on <line> of {source}"
        )
    return value
