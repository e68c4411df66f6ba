import subprocess
from unittest import mock

import pytest
import yaml

from wfsdk.lintcheck import (
    LINTER_COMMAND,
    VERSION_KEY,
    compare_versions,
    get_current_version,
    is_version_valid,
    main,
    major_minor,
    parse_workflow_version_from_file,
)

VALID_WORKFLOW = (
    "name: Test\n"
    "jobs:\n"
    "  build:\n"
    "    env:\n"
    '      OTHER_SETTING: "1"\n'
    f'      {VERSION_KEY}: "v1.64.6"\n'
)

MISSING_KEY_WORKFLOW = (
    "name: Test\n"
    "jobs:\n"
    "  build:\n"
    "    env:\n"
    '      OTHER_SETTING: "1"\n'
)


def _tool_output(version):
    return f"{LINTER_COMMAND} has version {version} built from abc\n"


def _completed(stdout):
    return subprocess.CompletedProcess(
        args=[LINTER_COMMAND, "--version"], returncode=0, stdout=stdout, stderr=""
    )


@pytest.fixture
def valid_file(tmp_path):
    path = tmp_path / "test-tooling.yml"
    path.write_text(VALID_WORKFLOW)
    return str(path)


@pytest.fixture
def missing_key_file(tmp_path):
    path = tmp_path / "invalid-test.yml"
    path.write_text(MISSING_KEY_WORKFLOW)
    return str(path)


def test_parse_missing_file(tmp_path):
    with pytest.raises(OSError):
        parse_workflow_version_from_file(str(tmp_path / "invalid.yaml"))


def test_parse_missing_key(missing_key_file):
    assert parse_workflow_version_from_file(missing_key_file) == ""


def test_parse_invalid_yaml(tmp_path):
    path = tmp_path / "invalid-yaml.yml"
    path.write_text("jobs: [unclosed\n")
    with pytest.raises(yaml.YAMLError):
        parse_workflow_version_from_file(str(path))


def test_parse_wrong_structure(tmp_path):
    path = tmp_path / "list.yml"
    path.write_text("jobs:\n  - a\n  - b\n")
    with pytest.raises(ValueError):
        parse_workflow_version_from_file(str(path))


def test_parse_valid_file(valid_file):
    assert parse_workflow_version_from_file(valid_file) == "v1.64.6"


@mock.patch("subprocess.run")
def test_get_current_version(run):
    run.return_value = _completed(
        f"{LINTER_COMMAND} has version 1.64.6 built from abc on 2025-01-01\n"
    )
    assert get_current_version() == "v1.64.6"


@mock.patch("subprocess.run")
def test_get_current_version_with_v_prefix(run):
    run.return_value = _completed(_tool_output("v1.54.2"))
    assert get_current_version() == "v1.54.2"


@mock.patch("subprocess.run")
def test_get_current_version_no_match(run):
    run.return_value = _completed("something else\n")
    with pytest.raises(ValueError, match="no version found"):
        get_current_version()


@mock.patch("subprocess.run", side_effect=FileNotFoundError("linter"))
def test_get_current_version_missing_tool(run):
    with pytest.raises(OSError):
        get_current_version()


@pytest.mark.parametrize(
    "workflow, current, expected",
    [
        ("v1.54.2", "v1.54.2", True),
        ("v1.54.3", "v1.54.2", True),
        ("v1.54.2", "v1.54.3", True),
        ("v1.54.2", "v1.52.2", False),
        ("v1.52.2", "v1.54.2", False),
    ],
)
def test_is_version_valid(workflow, current, expected):
    assert is_version_valid(workflow, current) is expected


@pytest.mark.parametrize(
    "version, expected",
    [
        ("v1.54.2", "v1.54"),
        ("v2", "v2.0"),
        ("v1.2", "v1.2"),
        ("v1.2.3-rc.1+build", "v1.2"),
        ("1.2.3", ""),
        ("v01.2.3", ""),
        ("v1.2-pre", ""),
        ("", ""),
    ],
)
def test_major_minor(version, expected):
    assert major_minor(version) == expected


@mock.patch("subprocess.run")
def test_compare_versions_valid(run, valid_file):
    run.return_value = _completed(_tool_output("1.64.7"))
    assert "Linter version is valid" in compare_versions(valid_file)


@mock.patch("subprocess.run")
def test_compare_versions_invalid(run, missing_key_file):
    run.return_value = _completed(_tool_output("1.64.6"))
    assert "Invalid version" in compare_versions(missing_key_file)


def test_compare_versions_bad_path(tmp_path):
    result = compare_versions(str(tmp_path / "invalid-test-incorrect-path.yml"))
    assert "Error parsing workflow" in result


@mock.patch("subprocess.run", side_effect=FileNotFoundError("linter"))
def test_compare_versions_tool_missing(run, valid_file):
    assert "Error getting current version" in compare_versions(valid_file)


@mock.patch("subprocess.run")
def test_main_prints_result(run, valid_file, capsys):
    run.return_value = _completed(_tool_output("1.64.6"))
    assert main([valid_file]) == 0
    assert "Linter version is valid (MajorMinor): v1.64.6" in capsys.readouterr().out