import pytest

from beadwork import fields
from beadwork.issues import Issue


def _issue(description: str) -> Issue:
    return Issue(id="gt-1", title="test", description=description)


class TestAgentFields:
    def test_parse_reads_all_fields(self) -> None:
        issue = _issue(
            "role_type: deacon\n"
            "rig: gastown\n"
            "agent_state: working\n"
            "hook_bead: gt-123\n"
            "role_bead: gt-role-deacon\n"
        )

        parsed = fields.parse_agent_fields(issue)

        assert parsed == fields.AgentFields(
            role_type="deacon",
            rig="gastown",
            agent_state="working",
            hook_bead="gt-123",
            role_bead="gt-role-deacon",
        )

    def test_parse_accepts_kebab_flat_and_mixed_case_keys(self) -> None:
        parsed = fields.parse_agent_fields_from_description(
            "Role-Type: witness\nAGENTSTATE: idle\n  hook-bead :  gt-9  "
        )

        assert parsed == fields.AgentFields(
            role_type="witness", agent_state="idle", hook_bead="gt-9"
        )

    @pytest.mark.parametrize("null_value", ["null", "NULL", "Null"])
    def test_parse_treats_null_as_absent(self, null_value: str) -> None:
        parsed = fields.parse_agent_fields_from_description(
            f"role_type: polecat\nrig: {null_value}\nhook_bead: {null_value}"
        )

        assert parsed == fields.AgentFields(role_type="polecat")

    def test_parse_returns_none_when_only_nulls(self) -> None:
        assert fields.parse_agent_fields_from_description("rig: null\nhook_bead: null") is None

    def test_parse_returns_none_without_issue_or_description(self) -> None:
        assert fields.parse_agent_fields(None) is None
        assert fields.parse_agent_fields(_issue("")) is None
        assert fields.parse_agent_fields_from_description("") is None

    def test_parse_ignores_prose_empty_values_and_unknown_keys(self) -> None:
        parsed = fields.parse_agent_fields_from_description(
            "Agent bead for the deacon.\n"
            "role_type:\n"
            "notes: keep the patrol running\n"
            "agent_state: running"
        )

        assert parsed == fields.AgentFields(agent_state="running")

    def test_parse_last_occurrence_wins(self) -> None:
        parsed = fields.parse_agent_fields_from_description(
            "agent_state: idle\nagent_state: working"
        )

        assert parsed is not None
        assert parsed.agent_state == "working"

    def test_parse_keeps_colons_in_values(self) -> None:
        parsed = fields.parse_agent_fields_from_description("hook_bead: gt-1:step")

        assert parsed is not None
        assert parsed.hook_bead == "gt-1:step"

    def test_format_uses_canonical_order(self) -> None:
        formatted = fields.format_agent_fields(
            fields.AgentFields(role_bead="gt-role", role_type="deacon", agent_state="idle")
        )

        assert formatted == "role_type: deacon\nagent_state: idle\nrole_bead: gt-role"

    def test_format_empty_record(self) -> None:
        assert fields.format_agent_fields(None) == ""
        assert fields.format_agent_fields(fields.AgentFields()) == ""
        assert fields.format_agent_fields(fields.AgentFields(rig="")) == ""

    def test_set_replaces_agent_block(self) -> None:
        issue = _issue("role_type: deacon\nagent_state: idle\n\nPatrols the town.")

        updated = fields.set_agent_fields(
            issue, fields.AgentFields(role_type="deacon", agent_state="working")
        )

        assert updated == "role_type: deacon\nagent_state: working\n\nPatrols the town."


class TestAttachmentFields:
    def test_parse_reads_fields(self) -> None:
        parsed = fields.parse_attachment_fields(
            _issue(
                "attached_molecule: gt-mol-abc\n"
                "attached-at: 2026-01-02T03:04:05Z\n"
                "AttachedArgs: focus on flaky tests"
            )
        )

        assert parsed == fields.AttachmentFields(
            attached_molecule="gt-mol-abc",
            attached_at="2026-01-02T03:04:05Z",
            attached_args="focus on flaky tests",
        )

    def test_parse_keeps_null_literal(self) -> None:
        parsed = fields.parse_attachment_fields_from_description("attached_molecule: null")

        assert parsed == fields.AttachmentFields(attached_molecule="null")

    def test_parse_returns_none_without_fields(self) -> None:
        assert fields.parse_attachment_fields(_issue("Handoff notes only.")) is None

    def test_set_on_empty_description(self) -> None:
        updated = fields.set_attachment_fields(
            _issue(""), fields.AttachmentFields(attached_molecule="gt-mol-1")
        )

        assert updated == "attached_molecule: gt-mol-1"

    def test_set_none_record_strips_owned_lines(self) -> None:
        issue = _issue("attached_molecule: gt-mol-1\nattached_at: now\n\nKeep this.\n")

        assert fields.set_attachment_fields(issue, None) == "Keep this."

    def test_set_moves_block_to_top_and_trims_blank_lines(self) -> None:
        issue = _issue("\n\nIntro line\n\nattached_molecule: old\n\nMore prose\n\n\n")

        updated = fields.set_attachment_fields(
            issue, fields.AttachmentFields(attached_molecule="new")
        )

        assert updated == "attached_molecule: new\n\nIntro line\n\n\nMore prose"


class TestMRFields:
    def test_parse_and_set_round_trip_with_prose(self) -> None:
        issue = _issue("branch: foo\ntarget: main\n\nFree prose here.")

        parsed = fields.parse_mr_fields(issue)
        assert parsed == fields.MRFields(branch="foo", target="main")

        updated = fields.set_mr_fields(
            issue, fields.MRFields(branch="foo", target="main", worker="alice")
        )
        assert updated == "branch: foo\ntarget: main\nworker: alice\n\nFree prose here."

    def test_parse_accepts_all_spellings(self) -> None:
        parsed = fields.parse_mr_fields_from_description(
            "Source-Issue: gt-xyz\nmergecommit: abc123\nclose_reason: merged\nRIG: gastown"
        )

        assert parsed == fields.MRFields(
            source_issue="gt-xyz", merge_commit="abc123", close_reason="merged", rig="gastown"
        )

    def test_format_full_record(self) -> None:
        record = fields.MRFields(
            branch="polecat/Nux/gt-xyz",
            target="main",
            source_issue="gt-xyz",
            worker="Nux",
            rig="gastown",
            merge_commit="abc123",
            close_reason="merged",
        )

        assert fields.format_mr_fields(record) == (
            "branch: polecat/Nux/gt-xyz\n"
            "target: main\n"
            "source_issue: gt-xyz\n"
            "worker: Nux\n"
            "rig: gastown\n"
            "merge_commit: abc123\n"
            "close_reason: merged"
        )

    def test_set_without_issue_formats_fields(self) -> None:
        assert fields.set_mr_fields(None, fields.MRFields(branch="b")) == "branch: b"

    def test_set_preserves_lines_without_colon_and_unknown_keys(self) -> None:
        issue = _issue("Summary of the change\nreviewer: bob\nbranch: old\nhttps://example.test/x")

        updated = fields.set_mr_fields(issue, fields.MRFields(branch="new"))

        assert updated == (
            "branch: new\n\nSummary of the change\nreviewer: bob\nhttps://example.test/x"
        )

    def test_set_is_idempotent(self) -> None:
        issue = _issue("Prose first\nbranch: a\n\n  \nmore prose\n")
        record = fields.MRFields(branch="b", worker="w")

        once = fields.set_mr_fields(issue, record)
        twice = fields.set_mr_fields(_issue(once), record)

        assert once == twice

    def test_set_with_empty_record_leaves_trimmed_prose(self) -> None:
        issue = _issue("branch: a\n\nJust prose.\n")

        assert fields.set_mr_fields(issue, fields.MRFields()) == "Just prose."


class TestRecordKindsCoexist:
    DESCRIPTION = (
        "role_type: refinery\n"
        "agent_state: working\n"
        "attached_molecule: gt-mol-42\n"
        "attached_at: 2026-01-01T00:00:00Z\n"
        "branch: feature\n"
        "target: main\n"
        "\n"
        "Shared prose."
    )

    def test_setting_mr_fields_leaves_other_kinds_intact(self) -> None:
        issue = _issue(self.DESCRIPTION)
        agent_before = fields.parse_agent_fields(issue)
        attachment_before = fields.parse_attachment_fields(issue)

        updated = _issue(fields.set_mr_fields(issue, fields.MRFields(branch="other")))

        assert fields.parse_agent_fields(updated) == agent_before
        assert fields.parse_attachment_fields(updated) == attachment_before
        assert fields.parse_mr_fields(updated) == fields.MRFields(branch="other")

    def test_repeated_sets_do_not_disturb_other_kinds(self) -> None:
        issue = _issue(self.DESCRIPTION)
        record = fields.AttachmentFields(attached_molecule="gt-mol-43")

        first = fields.set_attachment_fields(issue, record)
        second = fields.set_attachment_fields(_issue(first), record)

        assert first == second
        assert fields.parse_mr_fields(_issue(second)) == fields.MRFields(
            branch="feature", target="main"
        )
        assert fields.parse_agent_fields(_issue(second)) == fields.AgentFields(
            role_type="refinery", agent_state="working"
        )

    def test_shared_rig_key_is_claimed_by_both_kinds(self) -> None:
        issue = _issue("rig: gastown\nrole_type: witness")

        updated = fields.set_mr_fields(issue, fields.MRFields(branch="b"))

        assert updated == "branch: b\n\nrole_type: witness"


class TestCodecRegistry:
    def test_codec_for_known_kinds(self) -> None:
        assert fields.codec_for("agent") is fields.AGENT_CODEC
        assert fields.codec_for(" MR ") is fields.MR_CODEC
        assert set(fields.FIELD_KINDS) == {"agent", "attachment", "mr"}

    def test_codec_for_unknown_kind(self) -> None:
        with pytest.raises(ValueError, match="unknown field kind"):
            fields.codec_for("convoy")

    def test_field_keys_include_all_spellings(self) -> None:
        assert fields.agent_field_keys() >= {"hook_bead", "hook-bead", "hookbead", "rig"}
        assert fields.attachment_field_keys() == {
            "attached_molecule",
            "attached-molecule",
            "attachedmolecule",
            "attached_at",
            "attached-at",
            "attachedat",
            "attached_args",
            "attached-args",
            "attachedargs",
        }
        assert "close-reason" in fields.mr_field_keys()

    def test_record_from_mapping_resolves_aliases(self) -> None:
        record = fields.record_from_mapping("mr", {"Source-Issue": " gt-1 ", "worker": "nux"})

        assert record == fields.MRFields(source_issue="gt-1", worker="nux")

    def test_record_from_mapping_rejects_unknown_keys(self) -> None:
        with pytest.raises(ValueError, match="unknown agent field 'branch'"):
            fields.record_from_mapping("agent", {"branch": "main"})
