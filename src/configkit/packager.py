# src/configkit/packager.py
"""
Output bundle packaging.

Purpose:
- Lay out the generated artifacts as a bundle:
    configkit-output/
      {output file}              e.g. CLAUDE.md
      skills/{skill id}/SKILL.md one per selected skill, in selection order
- Write the bundle to a directory or a zip archive.
- Persist the decision tree result as readable JSON for auditing.

The derivation core never touches the filesystem; this module is the only writer.
"""
from __future__ import annotations

import json
import logging
import zipfile
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path, PurePosixPath
from typing import Dict, List, Optional

from configkit.answers import AnswerSet
from configkit.assembler import Overrides, assemble_config
from configkit.decision_tree import DecisionTreeResult
from configkit.skill_docs import get_skill_document

logger = logging.getLogger("configkit.packager")

BUNDLE_ROOT = "configkit-output"
SKILLS_DIR = "skills"
SKILL_FILE = "SKILL.md"

# Rough averages used for the size estimate shown before download.
AVG_SKILL_BYTES = 650
AVG_CONFIG_BYTES = 2800


class BundleError(RuntimeError):
    pass


@dataclass
class Bundle:
    root: str
    output_file: str
    # Relative path (inside root) -> file text, in write order.
    files: Dict[str, str] = field(default_factory=dict)

    @property
    def config_text(self) -> str:
        return self.files[self.output_file]

    def paths(self) -> List[str]:
        return [f"{self.root}/{p}" for p in self.files]


def skill_path(skill_id: str) -> str:
    return f"{SKILLS_DIR}/{skill_id}/{SKILL_FILE}"


def build_bundle(
    answers: AnswerSet,
    result: DecisionTreeResult,
    overrides: Overrides = None,
    generated_on: Optional[date] = None,
) -> Bundle:
    bundle = Bundle(root=BUNDLE_ROOT, output_file=result.output_file)
    bundle.files[result.output_file] = assemble_config(answers, result, overrides, generated_on)
    for skill_id in result.skills:
        bundle.files[skill_path(skill_id)] = get_skill_document(skill_id)
    return bundle


def get_file_tree(result: DecisionTreeResult) -> List[str]:
    """Directory-style listing of the bundle, for previews."""
    tree = [
        f"{BUNDLE_ROOT}/",
        f"{BUNDLE_ROOT}/{result.output_file}",
        f"{BUNDLE_ROOT}/{SKILLS_DIR}/",
    ]
    for skill_id in result.skills:
        tree.append(f"{BUNDLE_ROOT}/{SKILLS_DIR}/{skill_id}/")
        tree.append(f"{BUNDLE_ROOT}/{skill_path(skill_id)}")
    return tree


def estimate_bundle_size(result: DecisionTreeResult) -> str:
    total = AVG_CONFIG_BYTES + len(result.skills) * AVG_SKILL_BYTES
    return f"~{round(total / 1024)} KB"


def _safe_relative(path: str) -> PurePosixPath:
    # Paths must stay inside the bundle root.
    rel = PurePosixPath(path)
    if rel.is_absolute() or ".." in rel.parts:
        raise BundleError(f"Refusing to write outside the bundle root: {path!r}")
    return rel


def write_bundle_dir(bundle: Bundle, out_dir: Path) -> Path:
    """Write the bundle under out_dir/<root>/ and return that directory."""
    root = out_dir / bundle.root
    for rel, text in bundle.files.items():
        target = root.joinpath(*_safe_relative(rel).parts)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
    logger.info("bundle written dir=%s files=%d", root, len(bundle.files))
    return root


def write_bundle_zip(bundle: Bundle, zip_path: Path) -> Path:
    zip_path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(zip_path, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=6) as zf:
        for rel, text in bundle.files.items():
            zf.writestr(f"{bundle.root}/{_safe_relative(rel)}", text)
    logger.info("bundle written zip=%s files=%d", zip_path, len(bundle.files))
    return zip_path


# Pretty, diff-friendly JSON of the full derivation, for auditing what produced a bundle.
def write_result_json(result: DecisionTreeResult, output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(result.to_dict(), f, indent=2, ensure_ascii=False)
