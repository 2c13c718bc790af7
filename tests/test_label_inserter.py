#!/usr/bin/env python3
"""
Label Inserter Tests

Block rendering, splicing, idempotence and verification.
"""

import pytest
import yaml

from policy_generator.libs.core.exceptions import ValuesDocumentError
from policy_generator.libs.values import (
    InsertionStatus, LabelBlock, LabelInserter, ValuesDocument
)

from test_constants import PolicyTestConstants, ValuesTestConstants


def make_block(version=None):
    return LabelBlock(
        component=PolicyTestConstants.COMPONENT,
        subscription=PolicyTestConstants.SUBSCRIPTION,
        channel=PolicyTestConstants.CHANNEL,
        source=PolicyTestConstants.DEFAULT_SOURCE,
        source_namespace=PolicyTestConstants.DEFAULT_SOURCE_NAMESPACE,
        version=version,
    )


EXPECTED_ACTIVE_BLOCK = [
    "      ### foo",
    "      foo: 'true'",
    "      foo-subscription-name: foo-op",
    "      foo-channel: stable",
    "      foo-source: redhat-operators",
    "      foo-source-namespace: openshift-marketplace",
]


class TestLabelBlock:
    """Rendering the block in both forms"""

    def test_active_form(self):
        assert make_block().render(commented=False) == EXPECTED_ACTIVE_BLOCK

    def test_commented_form(self):
        rendered = make_block().render(commented=True)
        assert rendered[0] == "#       ### foo"
        assert all(line.startswith("#       ") for line in rendered)
        assert [line[2:] for line in rendered] == EXPECTED_ACTIVE_BLOCK

    def test_version_adds_one_line(self):
        rendered = make_block(PolicyTestConstants.VERSION).render()
        assert rendered[:-1] == EXPECTED_ACTIVE_BLOCK
        assert rendered[-1] == "      foo-version: 'foo-op.v1.2.3'"


class TestInsertion:
    """Splicing into a values document"""

    def test_block_lands_after_labels_line(self):
        document = ValuesDocument(ValuesTestConstants.MANAGED_ONLY)
        original_lines = list(document.lines)
        labels_line = ValuesTestConstants.MANAGED_LABELS_LINE

        updated, result = LabelInserter(make_block()).insert(document, "managedClusterSets", "managed")

        assert result.status == InsertionStatus.INSERTED
        # 1-based lines 11..16 hold the block
        assert updated.lines[labels_line:labels_line + 6] == EXPECTED_ACTIVE_BLOCK
        # old line 11 onward shifted down by 6
        assert updated.lines[labels_line + 6:] == original_lines[labels_line:]
        assert updated.lines[:labels_line] == original_lines[:labels_line]

    def test_version_line_appended(self):
        document = ValuesDocument(ValuesTestConstants.MANAGED_ONLY)
        labels_line = ValuesTestConstants.MANAGED_LABELS_LINE

        updated, _ = LabelInserter(make_block(PolicyTestConstants.VERSION)).insert(
            document, "managedClusterSets", "managed"
        )

        assert updated.lines[labels_line + 6] == "      foo-version: 'foo-op.v1.2.3'"
        assert len(updated.lines) == len(document.lines) + 7

    def test_second_insertion_is_noop(self):
        inserter = LabelInserter(make_block())
        document = ValuesDocument(ValuesTestConstants.MANAGED_ONLY)

        once, first = inserter.insert(document, "managedClusterSets", "managed")
        twice, second = inserter.insert(once, "managedClusterSets", "managed")

        assert first.status == InsertionStatus.INSERTED
        assert second.status == InsertionStatus.ALREADY_EXISTS
        assert str(twice) == str(once)

    def test_commented_insertion_found_only_in_commented_form(self):
        inserter = LabelInserter(make_block())
        document = ValuesDocument(ValuesTestConstants.FULL)

        updated, result = inserter.insert(document, "clusters", "cluster-a", commented=True)

        assert result.status == InsertionStatus.INSERTED
        assert result.target == "clusters/cluster-a (commented)"
        assert updated.component_exists("clusters", "cluster-a", "foo", commented=True)
        assert not updated.component_exists("clusters", "cluster-a", "foo", commented=False)
        index = updated.find_labels_line("clusters", "cluster-a", commented=True)
        assert updated.lines[index + 2] == "#       foo: 'true'"

    def test_inserted_labels_parse_as_yaml(self):
        updated, _ = LabelInserter(make_block()).insert(
            ValuesDocument(ValuesTestConstants.FULL), "hubClusterSets", "hub"
        )
        data = yaml.safe_load(str(updated))
        labels = data["hubClusterSets"]["hub"]["labels"]
        assert labels["foo"] == "true"
        assert labels["foo-subscription-name"] == "foo-op"
        assert labels["gitops"] == "true"

    def test_missing_labels_line_skipped(self):
        document = ValuesDocument(ValuesTestConstants.FULL)
        updated, result = LabelInserter(make_block()).insert(document, "managedClusterSets", "nolabels")
        assert result.status == InsertionStatus.NO_LABELS_LINE
        assert str(updated) == ValuesTestConstants.FULL

    def test_sibling_labels_never_used(self):
        document = ValuesDocument(ValuesTestConstants.SIBLING_LEAK)
        updated, result = LabelInserter(make_block()).insert(document, "managedClusterSets", "first")
        assert result.status == InsertionStatus.NO_LABELS_LINE
        assert str(updated) == ValuesTestConstants.SIBLING_LEAK

    def test_unknown_target(self):
        document = ValuesDocument(ValuesTestConstants.NO_SECTIONS)
        updated, result = LabelInserter(make_block()).insert(document, "clusters", "cluster-a")
        assert result.status == InsertionStatus.NOT_FOUND
        assert updated is document


class TestBoundaries:
    """labels: as the final line of a document"""

    def test_append_without_trailing_newline(self):
        document = ValuesDocument(ValuesTestConstants.LABELS_LAST_LINE)
        updated, result = LabelInserter(make_block()).insert(document, "clusters", "cluster-a")

        assert result.status == InsertionStatus.INSERTED
        text = str(updated)
        assert not text.endswith("\n")
        assert text == ValuesTestConstants.LABELS_LAST_LINE + "\n" + "\n".join(EXPECTED_ACTIVE_BLOCK)

    def test_append_with_trailing_newline(self):
        source = ValuesTestConstants.LABELS_LAST_LINE + "\n"
        updated, _ = LabelInserter(make_block()).insert(ValuesDocument(source), "clusters", "cluster-a")

        text = str(updated)
        assert text.endswith("\n")
        assert text == source + "\n".join(EXPECTED_ACTIVE_BLOCK) + "\n"


class TestVerification:
    """Round-trip parse of the edited document"""

    def test_non_mapping_labels_rejected(self):
        document = ValuesDocument(ValuesTestConstants.SEQUENCE_LABELS)
        with pytest.raises(ValuesDocumentError, match="did not verify"):
            LabelInserter(make_block()).insert(document, "clusters", "cluster-a")

    def test_verification_can_be_disabled(self):
        document = ValuesDocument(ValuesTestConstants.SEQUENCE_LABELS)
        _, result = LabelInserter(make_block(), verify=False).insert(document, "clusters", "cluster-a")
        assert result.status == InsertionStatus.INSERTED

    def test_unparseable_original_skips_verification(self):
        text = "clusters:\n  cluster-a:\n    labels:\n      gitops: 'true'\n  bad: [unclosed\n"
        updated, result = LabelInserter(make_block()).insert(ValuesDocument(text), "clusters", "cluster-a")
        assert result.status == InsertionStatus.INSERTED
        assert "      foo: 'true'" in updated.lines



class TestEdgeComponentNames:
    """Valid names that YAML would read as numbers or keywords"""

    @pytest.mark.parametrize("component", PolicyTestConstants.EDGE_COMPONENTS)
    def test_active_insertion_verifies(self, component):
        block = LabelBlock(component, "op", "stable", "redhat-operators", "openshift-marketplace")
        inserter = LabelInserter(block)

        updated, result = inserter.insert(
            ValuesDocument(ValuesTestConstants.MANAGED_ONLY), "managedClusterSets", "managed"
        )

        assert result.status == InsertionStatus.INSERTED
        assert f"      {component}: 'true'" in updated.lines

        _, again = inserter.insert(updated, "managedClusterSets", "managed")
        assert again.status == InsertionStatus.ALREADY_EXISTS

    @pytest.mark.parametrize("component", PolicyTestConstants.EDGE_COMPONENTS)
    def test_both_forms_agree(self, component):
        block = LabelBlock(component, "op", "stable", "redhat-operators", "openshift-marketplace")
        document = ValuesDocument(ValuesTestConstants.FULL)

        _, active = LabelInserter(block).insert(document, "hubClusterSets", "hub")
        _, commented = LabelInserter(block).insert(document, "clusters", "cluster-a", commented=True)

        assert active.status == commented.status == InsertionStatus.INSERTED
