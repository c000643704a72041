from __future__ import annotations

import re

import pytest

from scaffolder.naming import (
    java_package_to_path,
    now_iso_date,
    to_camel,
    to_java_package_safe,
    to_kebab,
    to_pascal,
)


@pytest.mark.parametrize(
    ("raw", "kebab", "pascal", "camel", "package_safe"),
    [
        ("issue-otp", "issue-otp", "IssueOtp", "issueOtp", "issueotp"),
        ("IssueOtp", "issue-otp", "IssueOtp", "issueOtp", "issueotp"),
        ("shared kernel", "shared-kernel", "SharedKernel", "sharedKernel", "sharedkernel"),
        ("login", "login", "Login", "login", "login"),
    ],
)
def test_case_conversions(raw: str, kebab: str, pascal: str, camel: str, package_safe: str) -> None:
    assert to_kebab(raw) == kebab
    assert to_pascal(raw) == pascal
    assert to_camel(raw) == camel
    assert to_java_package_safe(raw) == package_safe


def test_java_package_to_path() -> None:
    assert java_package_to_path(" com.acme.orders ") == "com/acme/orders"


def test_now_iso_date_shape() -> None:
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", now_iso_date())
