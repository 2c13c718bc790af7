#!/usr/bin/env python3
"""
Template Engine Tests

Placeholder substitution and the policy descriptor's placeholder mapping.
"""

import logging

import pytest

from policy_generator.libs.chart import TemplateEngine
from policy_generator.libs.core.config import PolicyDescriptor
from policy_generator.libs.core.exceptions import TemplateError
from policy_generator.libs.core.utils import to_camel_case

from test_constants import PolicyTestConstants


@pytest.fixture
def descriptor():
    return PolicyDescriptor(
        component=PolicyTestConstants.KEBAB_COMPONENT,
        subscription="cert-manager-operator",
        channel=PolicyTestConstants.CHANNEL,
        namespace="cert-manager",
    )


class TestSubstitution:
    """Literal replacement of known placeholders"""

    def test_replaces_every_known_placeholder(self, descriptor):
        text = "name: {{COMPONENT_NAME}}\nkey: {{COMPONENT_CAMEL}}\nsub: {{SUBSCRIPTION_NAME}} {{SUBSCRIPTION_NAME}}\n"
        rendered = TemplateEngine().substitute(text, descriptor.placeholders())
        assert rendered == (
            "name: cert-manager\nkey: certManager\n"
            "sub: cert-manager-operator cert-manager-operator\n"
        )

    def test_helm_expressions_untouched(self, descriptor):
        text = (
            "namespace: {{ .Values.policy_namespace }}\n"
            "name: '{{ \"{{hub\" }} index .ManagedClusterLabels \"autoshift.io/{{COMPONENT_NAME}}\" {{ \"hub}}\" }}'\n"
            "{{- if .Values.{{COMPONENT_CAMEL}}.version }}\n"
        )
        rendered = TemplateEngine().substitute(text, descriptor.placeholders())
        assert "{{ .Values.policy_namespace }}" in rendered
        assert PolicyTestConstants.HUB_MARKER in rendered
        assert "autoshift.io/cert-manager" in rendered
        assert "{{- if .Values.certManager.version }}" in rendered

    def test_unset_version_renders_empty(self, descriptor):
        rendered = TemplateEngine().substitute("version: '{{VERSION}}'", descriptor.placeholders())
        assert rendered == "version: ''"

    def test_values_inserted_literally(self):
        placeholders = {"CHANNEL": "stable/v1 & \\1 $x"}
        rendered = TemplateEngine().substitute("channel: {{CHANNEL}}", placeholders)
        assert rendered == "channel: stable/v1 & \\1 $x"

    def test_unknown_placeholder_left_with_warning(self, descriptor, caplog):
        with caplog.at_level(logging.WARNING):
            rendered = TemplateEngine().substitute(
                "a: {{UNKNOWN_THING}}\nb: {{CHANNEL}}", descriptor.placeholders(), source="x.template"
            )
        assert rendered == "a: {{UNKNOWN_THING}}\nb: stable"
        assert "UNKNOWN_THING" in caplog.text

    def test_strict_mode_rejects_unknown_placeholder(self, descriptor):
        with pytest.raises(TemplateError):
            TemplateEngine(strict_placeholders=True).substitute("{{NOPE}}", descriptor.placeholders())


class TestRenderFiles:
    """Reading templates from disk"""

    def test_render_to_file(self, tmp_path, descriptor):
        template = tmp_path / "Chart.yaml.template"
        template.write_text("name: {{COMPONENT_NAME}}\n")
        output = tmp_path / "out" / "Chart.yaml"

        TemplateEngine().render_to_file(template, output, descriptor.placeholders())

        assert output.read_text() == "name: cert-manager\n"
        assert template.read_text() == "name: {{COMPONENT_NAME}}\n"

    def test_missing_template_raises(self, tmp_path, descriptor):
        with pytest.raises(TemplateError, match="Template file not found"):
            TemplateEngine().render(tmp_path / "missing.template", descriptor.placeholders())


class TestDescriptor:
    """Derived descriptor values"""

    @pytest.mark.parametrize("kebab,camel", [
        ("cert-manager", "certManager"),
        ("metallb", "metallb"),
        ("openshift-gitops-operator", "openshiftGitopsOperator"),
        ("nmstate-2", "nmstate-2"),
    ])
    def test_camel_case(self, kebab, camel):
        assert to_camel_case(kebab) == camel

    def test_defaults_and_placeholders(self, descriptor):
        placeholders = descriptor.placeholders()
        assert placeholders["SOURCE"] == PolicyTestConstants.DEFAULT_SOURCE
        assert placeholders["SOURCE_NAMESPACE"] == PolicyTestConstants.DEFAULT_SOURCE_NAMESPACE
        assert placeholders["COMPONENT_CAMEL"] == PolicyTestConstants.CAMEL_COMPONENT
        assert placeholders["VERSION"] == ""
        assert descriptor.policy_file_name == "policy-cert-manager-operator-install.yaml"

    def test_descriptor_is_immutable(self, descriptor):
        with pytest.raises(AttributeError):
            descriptor.channel = "fast"
