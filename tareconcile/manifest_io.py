"""Read and write master manifest XML documents.

Schema::

    <ta-tool-export>
      <dv-plan project-id="..." id="...">
        <build-result>...</build-result>
        <verification-loop>...</verification-loop>
        <protocols>
          <protocol project-id="..." id="...">
            <test-script-reference>...</test-script-reference>
          </protocol>
        </protocols>
      </dv-plan>
    </ta-tool-export>

Derived manifests are written with the same schema, indented by two spaces.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Optional, Union

from tareconcile.errors import ExportError, ManifestParseError
from tareconcile.logging import get_logger
from tareconcile.model.manifest import Manifest, ManifestEntry

logger = get_logger(__name__)

ROOT_TAG = "ta-tool-export"
PLAN_TAG = "dv-plan"
PROTOCOLS_TAG = "protocols"
PROTOCOL_TAG = "protocol"


def _child_text(element: ET.Element, tag: str) -> str:
    child = element.find(tag)
    if child is None or child.text is None:
        return ""
    return child.text.strip()


def _parse_entry(element: ET.Element, index: int, source: Optional[str]) -> ManifestEntry:
    tc_id = (element.get("id") or "").strip()
    if not tc_id:
        raise ManifestParseError(
            f"<{PROTOCOL_TAG}> #{index + 1} has no 'id' attribute", source
        )
    return ManifestEntry(
        project_id=element.get("project-id", ""),
        test_case_id=tc_id,
        test_script_reference=_child_text(element, "test-script-reference"),
    )


def parse_manifest(text: Union[str, bytes], source: Optional[str] = None) -> Manifest:
    """Parse master manifest XML.

    Args:
        text: XML document.
        source: Name used in error messages (usually the file path).

    Returns:
        The parsed manifest, entries in document order.

    Raises:
        ManifestParseError: On malformed XML, unexpected structure or
            duplicate test-case ids.
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise ManifestParseError(f"malformed XML: {exc}", source) from exc

    if root.tag != ROOT_TAG:
        raise ManifestParseError(
            f"expected root element <{ROOT_TAG}>, found <{root.tag}>", source
        )
    plan = root.find(PLAN_TAG)
    if plan is None:
        raise ManifestParseError(f"missing <{PLAN_TAG}> element", source)

    entries: List[ManifestEntry] = []
    seen = set()
    for index, element in enumerate(plan.findall(f"{PROTOCOLS_TAG}/{PROTOCOL_TAG}")):
        entry = _parse_entry(element, index, source)
        if entry.test_case_id in seen:
            raise ManifestParseError(
                f"duplicate test case id '{entry.test_case_id}'", source
            )
        seen.add(entry.test_case_id)
        entries.append(entry)

    return Manifest(
        project_id=plan.get("project-id", ""),
        plan_id=plan.get("id", ""),
        build_result=_child_text(plan, "build-result"),
        verification_loop=_child_text(plan, "verification-loop"),
        entries=tuple(entries),
    )


def load_manifest(path: Path) -> Manifest:
    """Read and parse the master manifest at ``path``."""
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise ManifestParseError(
            f"cannot read file: {type(exc).__name__}: {exc}", path
        ) from exc
    manifest = parse_manifest(data, source=str(path))
    logger.debug(
        "Loaded manifest %s (plan=%s, entries=%d)", path, manifest.plan_id, len(manifest)
    )
    return manifest


def manifest_to_element(manifest: Manifest) -> ET.Element:
    root = ET.Element(ROOT_TAG)
    plan = ET.SubElement(
        root, PLAN_TAG, {"project-id": manifest.project_id, "id": manifest.plan_id}
    )
    ET.SubElement(plan, "build-result").text = manifest.build_result
    ET.SubElement(plan, "verification-loop").text = manifest.verification_loop
    protocols = ET.SubElement(plan, PROTOCOLS_TAG)
    for entry in manifest.entries:
        protocol = ET.SubElement(
            protocols,
            PROTOCOL_TAG,
            {"project-id": entry.project_id, "id": entry.test_case_id},
        )
        ET.SubElement(protocol, "test-script-reference").text = (
            entry.test_script_reference
        )
    return root


def manifest_to_xml(manifest: Manifest) -> str:
    """Serialize ``manifest`` as indented XML text with a declaration."""
    root = manifest_to_element(manifest)
    ET.indent(root, space="  ")
    body = ET.tostring(root, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}\n'


def write_manifest(manifest: Manifest, path: Path, text: Optional[str] = None) -> None:
    """Write ``manifest`` to ``path``.

    Args:
        manifest: Manifest to write.
        path: Destination file; the parent directory must exist.
        text: Pre-serialized XML for ``manifest``, when already available.

    Raises:
        ExportError: If the file cannot be written.
    """
    if text is None:
        text = manifest_to_xml(manifest)
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise ExportError(path, exc) from exc
    logger.info(f"Wrote {len(manifest)} entries to: {path}")
