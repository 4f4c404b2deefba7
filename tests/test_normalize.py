"""Unit tests for payload normalization: whitespace, skill de-duplication, partial CV payloads."""

import unittest

from app.schemas.common import Link
from app.schemas.cv import CVUpdate
from app.schemas.user import UpdateUserRequest
from app.services.normalize import (
    normalize_cv_create,
    normalize_cv_update,
    normalize_optional,
    normalize_profile_update,
    normalize_skills,
    normalize_text,
)
from helpers import cv_payload


class TestNormalizeText(unittest.TestCase):
    def test_trims_and_collapses_whitespace_runs(self) -> None:
        self.assertEqual(normalize_text("  Senior \t\n  Engineer  "), "Senior Engineer")

    def test_single_spaces_are_kept(self) -> None:
        self.assertEqual(normalize_text("a b c"), "a b c")

    def test_none_is_empty_string(self) -> None:
        self.assertEqual(normalize_text(None), "")

    def test_idempotent(self) -> None:
        samples = ["", " ", "a", "  a  b  ", "\t\tx\n\ny ", "a   b", "no-change"]
        for s in samples:
            with self.subTest(s=s):
                once = normalize_text(s)
                self.assertEqual(normalize_text(once), once)


class TestNormalizeOptional(unittest.TestCase):
    def test_blank_becomes_absent(self) -> None:
        self.assertIsNone(normalize_optional("   "))
        self.assertIsNone(normalize_optional(None))

    def test_value_is_normalized(self) -> None:
        self.assertEqual(normalize_optional("  Berlin   Mitte "), "Berlin Mitte")


class TestNormalizeSkills(unittest.TestCase):
    def test_first_casing_wins_and_order_is_preserved(self) -> None:
        self.assertEqual(normalize_skills(["Go", " go ", "GO", "Rust"]), ["Go", "Rust"])

    def test_empties_are_dropped(self) -> None:
        self.assertEqual(normalize_skills(["", "  ", "Python"]), ["Python"])

    def test_internal_whitespace_collapsed_before_comparison(self) -> None:
        self.assertEqual(
            normalize_skills(["Machine  Learning", "machine learning"]),
            ["Machine Learning"],
        )

    def test_idempotent(self) -> None:
        once = normalize_skills(["Go", " go ", "Rust ", "rust", "  C++  "])
        self.assertEqual(normalize_skills(once), once)


class TestNormalizeCvPayloads(unittest.TestCase):
    def test_create_normalizes_nested_items(self) -> None:
        payload = cv_payload(
            first_name="  Ada  ",
            summary="Line  one\n\nline two",
            skills=["Go", "go"],
            links=[Link(type=" github ", url=" https://github.com/ada ")],
        )
        normalized = normalize_cv_create(payload)
        self.assertEqual(normalized.first_name, "Ada")
        self.assertEqual(normalized.summary, "Line one line two")
        self.assertEqual(normalized.skills, ["Go"])
        self.assertEqual(normalized.links[0].type, "github")
        self.assertEqual(normalized.links[0].url, "https://github.com/ada")

    def test_update_keeps_absent_fields_absent(self) -> None:
        normalized = normalize_cv_update(CVUpdate(summary="  New   summary "))
        self.assertEqual(normalized.summary, "New summary")
        self.assertIsNone(normalized.job_title)
        self.assertIsNone(normalized.skills)

    def test_update_blank_scalar_becomes_absent(self) -> None:
        self.assertIsNone(normalize_cv_update(CVUpdate(city="   ")).city)

    def test_update_empty_list_stays_present(self) -> None:
        self.assertEqual(normalize_cv_update(CVUpdate(skills=[])).skills, [])


class TestNormalizeProfileUpdate(unittest.TestCase):
    def test_credentials_left_as_sent(self) -> None:
        req = UpdateUserRequest(headline="  Staff   Engineer ", password="  spaced password  ")
        normalized = normalize_profile_update(req)
        self.assertEqual(normalized.headline, "Staff Engineer")
        self.assertEqual(normalized.password, "  spaced password  ")
