"""Tests for fsproc.errors."""

import errno

import pytest

from fsproc.errors import (
    AccessDeniedError,
    AlreadyExistsError,
    CrossDeviceError,
    FsProcError,
    IOFailureError,
    JsonParseError,
    NotFoundError,
    ValidationFailure,
    Violation,
    error_from_dict,
    translate_os_error,
)


class TestErrorHierarchy:
    def test_all_inherit_from_base(self):
        errors = [
            ValidationFailure([]),
            NotFoundError("x"),
            AlreadyExistsError("x"),
            AccessDeniedError("x"),
            CrossDeviceError("x"),
            JsonParseError("x"),
            IOFailureError("x"),
        ]
        for err in errors:
            assert isinstance(err, FsProcError)

    def test_codes_are_distinct(self):
        codes = {
            cls.code
            for cls in (
                ValidationFailure,
                NotFoundError,
                AlreadyExistsError,
                AccessDeniedError,
                CrossDeviceError,
                JsonParseError,
                IOFailureError,
            )
        }
        assert len(codes) == 7

    def test_parse_error_is_not_io_failure(self):
        assert not isinstance(JsonParseError("x"), IOFailureError)

    def test_cause_kept(self):
        cause = ValueError("inner")
        err = IOFailureError("outer", cause=cause)
        assert err.cause is cause


class TestTranslateOsError:
    @pytest.mark.parametrize(
        "code, cls",
        [
            (errno.ENOENT, NotFoundError),
            (errno.EEXIST, AlreadyExistsError),
            (errno.EACCES, AccessDeniedError),
            (errno.EPERM, AccessDeniedError),
            (errno.EXDEV, CrossDeviceError),
            (errno.ENOSPC, IOFailureError),
            (errno.ENOTDIR, IOFailureError),
        ],
    )
    def test_errno_mapping(self, code, cls):
        exc = OSError(code, "boom", "/some/path")
        err = translate_os_error(exc)
        assert type(err) is cls
        assert err.path == "/some/path"
        assert err.cause is exc

    def test_explicit_path_wins(self):
        err = translate_os_error(FileNotFoundError(errno.ENOENT, "No such file", "/a"), "/b")
        assert err.path == "/b"
        assert "/b" in err.message

    def test_no_errno_is_io_failure(self):
        assert isinstance(translate_os_error(OSError("weird")), IOFailureError)


class TestWireForm:
    def test_to_dict(self):
        err = NotFoundError("missing", path="/x")
        assert err.to_dict() == {"code": "not_found", "message": "missing", "path": "/x"}

    def test_validation_failure_to_dict(self):
        err = ValidationFailure([Violation(path=("path",), message="Field required")])
        data = err.to_dict()
        assert data["code"] == "validation_failure"
        assert data["violations"] == [{"path": ["path"], "message": "Field required"}]
        assert "path: Field required" in str(err)

    def test_root_violation_location(self):
        assert Violation(path=(), message="bad").location == "<root>"

    def test_round_trip_classes(self):
        for err in (NotFoundError("a", path="/a"), AlreadyExistsError("b"), JsonParseError("c")):
            rebuilt = error_from_dict(err.to_dict())
            assert type(rebuilt) is type(err)
            assert rebuilt.message == err.message
            assert rebuilt.path == err.path

    def test_rebuild_validation_failure(self):
        rebuilt = error_from_dict(
            {"code": "validation_failure", "message": "m", "violations": [{"path": ["a", 0], "message": "bad"}]}
        )
        assert isinstance(rebuilt, ValidationFailure)
        assert rebuilt.violations == [Violation(path=("a", 0), message="bad")]

    def test_unknown_code_is_io_failure(self):
        assert isinstance(error_from_dict({"code": "mystery", "message": "?"}), IOFailureError)
