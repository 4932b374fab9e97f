"""Tests for SKILL.md description extraction."""

import textwrap

from skills_feed.skill_parser import SkillParser


def test_strips_frontmatter_heading_and_emphasis():
    md = "---\ntitle: x\n---\n# Heading\n\nThis is **the** description.\n\nMore text."

    assert SkillParser.extract_description(md) == "This is the description."


def test_short_text_is_not_a_description():
    assert SkillParser.extract_description("Hi.") is None
    assert SkillParser.extract_description("# Title\n\nTen chars!") is None


def test_eleven_characters_is_enough():
    assert SkillParser.extract_description("Eleven char") == "Eleven char"


def test_without_heading_starts_at_first_text_line():
    md = "\n\nFirst paragraph line one\nline two\n\nSecond paragraph"

    assert SkillParser.extract_description(md) == "First paragraph line one line two"


def test_skips_headings_code_fences_and_checklists():
    md = textwrap.dedent(
        """\
        # Tool

        ## Overview
        Runs the `build` step
        - [ ] not a description
        ```bash
        and reports results.
        """
    )

    assert SkillParser.extract_description(md) == "Runs the build step and reports results."


def test_links_become_their_text():
    md = "# T\n\nSee [the docs](https://example.com/docs) and _more_ here."

    assert SkillParser.extract_description(md) == "See the docs and more here."


def test_long_descriptions_are_truncated():
    md = "# T\n\n" + "word " * 100

    description = SkillParser.extract_description(md)

    assert len(description) == 200
    assert description.endswith("...")


def test_heading_only_document_has_no_description():
    assert SkillParser.extract_description("---\nname: x\n---\n# Only a title\n") is None


def test_parse_frontmatter():
    md = "---\nname: pdf\ndescription: Work with PDF files\n---\n# PDF\n"

    assert SkillParser.parse_frontmatter(md) == {"name": "pdf", "description": "Work with PDF files"}


def test_parse_frontmatter_ignores_invalid_yaml():
    assert SkillParser.parse_frontmatter("---\nname: [unclosed\n---\nbody") == {}
    assert SkillParser.parse_frontmatter("no frontmatter here") == {}


def test_describe_prefers_body_paragraph():
    md = "---\ndescription: From frontmatter field\n---\n# T\n\nFrom the body paragraph."

    assert SkillParser.describe(md) == "From the body paragraph."


def test_describe_falls_back_to_frontmatter_description():
    md = "---\nname: pdf\ndescription: >\n  Extract text and tables\n  from PDF files.\n---\n# PDF\n"

    assert SkillParser.describe(md) == "Extract text and tables from PDF files."


def test_describe_returns_none_without_any_description():
    assert SkillParser.describe("---\nname: x\n---\n# Title\n") is None
