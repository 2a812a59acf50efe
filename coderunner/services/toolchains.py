from __future__ import annotations

import os
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable

from coderunner.core.errors import MissingClassDeclarationError, UnsupportedLanguageError


EXEC_EXT: str = ".exe" if os.name == "nt" else ""
PYTHON_CMD: str = "python" if os.name == "nt" else "python3"
ARTIFACT_NAME: str = f"program{EXEC_EXT}"

JAVA_PUBLIC_CLASS_RE = re.compile(r"public\s+class\s+(\w+)", re.MULTILINE)


class Language(str, Enum):
    PYTHON = "Python"
    JAVASCRIPT = "JavaScript"
    C = "C"
    CPP = "C++"
    GO = "Go"
    JAVA = "Java"


# (workspace, source file) -> argv
Recipe = Callable[[Path, Path], list[str]]


@dataclass(frozen=True, slots=True)
class Toolchain:
    language: Language
    source_name: Callable[[str], str]
    run: Recipe
    compile: Recipe | None = None

    @property
    def compiled(self) -> bool:
        return self.compile is not None


def extract_java_class_name(code: str) -> str | None:
    match = JAVA_PUBLIC_CLASS_RE.search(code)
    if match is None:
        return None
    return match.group(1)


def _java_source_name(code: str) -> str:
    class_name = extract_java_class_name(code)
    if not class_name:
        raise MissingClassDeclarationError()
    return f"{class_name}.java"


def _fixed(name: str) -> Callable[[str], str]:
    return lambda _code: name


def _artifact(workspace: Path, _source: Path) -> list[str]:
    return [str(workspace / ARTIFACT_NAME)]


TOOLCHAINS: dict[Language, Toolchain] = {
    Language.PYTHON: Toolchain(
        language=Language.PYTHON,
        source_name=_fixed("program.py"),
        run=lambda _ws, src: [PYTHON_CMD, str(src)],
    ),
    Language.JAVASCRIPT: Toolchain(
        language=Language.JAVASCRIPT,
        source_name=_fixed("program.js"),
        run=lambda _ws, src: ["node", str(src)],
    ),
    Language.C: Toolchain(
        language=Language.C,
        source_name=_fixed("program.c"),
        compile=lambda ws, src: ["gcc", "-Wall", str(src), "-o", str(ws / ARTIFACT_NAME)],
        run=_artifact,
    ),
    Language.CPP: Toolchain(
        language=Language.CPP,
        source_name=_fixed("program.cpp"),
        compile=lambda ws, src: ["g++", "-Wall", str(src), "-o", str(ws / ARTIFACT_NAME)],
        run=_artifact,
    ),
    Language.GO: Toolchain(
        language=Language.GO,
        source_name=_fixed("program.go"),
        compile=lambda ws, src: ["go", "build", "-o", str(ws / ARTIFACT_NAME), str(src)],
        run=_artifact,
    ),
    Language.JAVA: Toolchain(
        language=Language.JAVA,
        source_name=_java_source_name,
        compile=lambda _ws, src: ["javac", str(src)],
        run=lambda ws, src: ["java", "-cp", str(ws), src.stem],
    ),
}

_missing = set(Language) - set(TOOLCHAINS)
if _missing:  # pragma: no cover - guards edits to the table above
    raise RuntimeError(f"no toolchain registered for: {sorted(m.value for m in _missing)}")


def resolve_language(language: str | Language) -> Language:
    try:
        return Language(language)
    except ValueError:
        raise UnsupportedLanguageError(str(language)) from None


def get_toolchain(language: str | Language) -> Toolchain:
    return TOOLCHAINS[resolve_language(language)]
