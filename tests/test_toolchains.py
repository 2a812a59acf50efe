from __future__ import annotations

from pathlib import Path

import pytest

from coderunner.core.errors import MissingClassDeclarationError, UnsupportedLanguageError
from coderunner.services.toolchains import (
    ARTIFACT_NAME,
    PYTHON_CMD,
    TOOLCHAINS,
    Language,
    extract_java_class_name,
    get_toolchain,
)


WS = Path("/jobs/abc")


def test_every_language_has_a_toolchain() -> None:
    assert set(TOOLCHAINS) == set(Language)
    assert [lang.value for lang in Language] == ["Python", "JavaScript", "C", "C++", "Go", "Java"]


@pytest.mark.parametrize("name", ["Rust", "python", "", "PYTHON"])
def test_unknown_language_is_rejected(name: str) -> None:
    with pytest.raises(UnsupportedLanguageError) as info:
        get_toolchain(name)
    assert str(info.value) == "Unsupported language"
    assert info.value.language == name


def test_interpreted_toolchains_have_no_compile_step() -> None:
    python = get_toolchain("Python")
    assert not python.compiled
    assert python.source_name("print(1)") == "program.py"
    assert python.run(WS, WS / "program.py") == [PYTHON_CMD, "/jobs/abc/program.py"]

    node = get_toolchain(Language.JAVASCRIPT)
    assert not node.compiled
    assert node.run(WS, WS / "program.js") == ["node", "/jobs/abc/program.js"]


@pytest.mark.parametrize(
    ("language", "source", "compiler"),
    [("C", "program.c", "gcc"), ("C++", "program.cpp", "g++")],
)
def test_c_family_compiles_to_fixed_artifact(language: str, source: str, compiler: str) -> None:
    toolchain = get_toolchain(language)
    assert toolchain.compiled
    assert toolchain.source_name("int main(){}") == source
    src = WS / source
    assert toolchain.compile(WS, src) == [compiler, "-Wall", str(src), "-o", str(WS / ARTIFACT_NAME)]
    assert toolchain.run(WS, src) == [str(WS / ARTIFACT_NAME)]


def test_go_builds_into_workspace() -> None:
    toolchain = get_toolchain("Go")
    src = WS / "program.go"
    assert toolchain.compile(WS, src) == ["go", "build", "-o", str(WS / ARTIFACT_NAME), str(src)]
    assert toolchain.run(WS, src) == [str(WS / ARTIFACT_NAME)]


def test_java_names_file_after_public_class() -> None:
    code = "public class HelloWorld { public static void main(String[] args) {} }"
    toolchain = get_toolchain("Java")
    assert toolchain.source_name(code) == "HelloWorld.java"
    src = WS / "HelloWorld.java"
    assert toolchain.compile(WS, src) == ["javac", str(src)]
    assert toolchain.run(WS, src) == ["java", "-cp", str(WS), "HelloWorld"]


def test_java_class_name_extraction() -> None:
    assert extract_java_class_name("public class HelloWorld {}") == "HelloWorld"
    assert extract_java_class_name("import x;\n\npublic   class\tMain {\n}") == "Main"
    assert extract_java_class_name("public class First {}\npublic class Second {}") == "First"
    assert extract_java_class_name("class HelloWorld { public static void main(String[] a) {} }") is None


def test_java_without_public_class_fails() -> None:
    with pytest.raises(MissingClassDeclarationError) as info:
        get_toolchain("Java").source_name("class Hidden {}")
    assert str(info.value) == "no public class found in Java code"
