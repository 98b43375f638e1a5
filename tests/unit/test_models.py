"""Unit tests for data models."""

import pytest
from pydantic import ValidationError

from hubpull.models.credential import Credential, IdentityKind, TokenType
from hubpull.models.image import LocalImage
from hubpull.models.reference import RegistryReference
from hubpull.models.selection import SelectionList, is_index_selection
from hubpull.models.session import Session, SessionMode, get_session, reset_session
from hubpull.utils.errors import InvalidReferenceError, SelectionOutOfRangeError, SessionError


class TestSelectionList:
    """Tests for SelectionList."""

    @pytest.mark.parametrize("size", [0, 1, 3, 20])
    def test_resolve_bounds(self, size):
        """Test that resolve succeeds exactly for 1..n."""
        labels = [f"label-{i}" for i in range(size)]
        choices = SelectionList.build(labels)

        for index in range(1, size + 1):
            assert choices.resolve(index) == labels[index - 1]
        for index in (0, -1, size + 1):
            with pytest.raises(IndexError):
                choices.resolve(index)

    def test_out_of_range_error_details(self):
        """Test the error carries the index and list size."""
        with pytest.raises(SelectionOutOfRangeError) as exc_info:
            SelectionList.build(["a", "b"]).resolve(3)
        assert exc_info.value.index == 3
        assert exc_info.value.size == 2
        assert "1-2" in str(exc_info.value)

    def test_numbered_follows_input_order(self):
        """Test that indices follow insertion order."""
        choices = SelectionList.build(["nginx", "bitnami/nginx", "ubuntu/nginx"])
        assert list(choices.numbered()) == [(1, "nginx"), (2, "bitnami/nginx"), (3, "ubuntu/nginx")]
        assert [e.index for e in choices.entries] == [1, 2, 3]

    def test_immutable(self):
        """Test that a built list cannot be modified."""
        choices = SelectionList.build(["a"])
        with pytest.raises(ValidationError):
            choices.labels = ("b",)

    def test_empty(self):
        assert len(SelectionList.empty()) == 0
        assert not SelectionList.empty()


class TestIsIndexSelection:
    """Tests for is_index_selection."""

    @pytest.mark.parametrize("text", ["1", "007", "42"])
    def test_numbers(self, text):
        assert is_index_selection(text)

    @pytest.mark.parametrize("text", ["", "nginx", "1a", "-1", "1.5", "ubuntu:22", "٣"])
    def test_not_numbers(self, text):
        assert not is_index_selection(text)


class TestRegistryReference:
    """Tests for RegistryReference."""

    def test_parse_bare(self):
        ref = RegistryReference.parse("nginx")
        assert ref == RegistryReference(repository="nginx")
        assert ref.render() == "nginx:latest"

    def test_parse_namespaced_tagged(self):
        ref = RegistryReference.parse("futuresecureai/fsai-os-frontend:v1.14.1")
        assert ref.namespace == "futuresecureai"
        assert ref.repository == "fsai-os-frontend"
        assert ref.tag == "v1.14.1"
        assert ref.render() == "futuresecureai/fsai-os-frontend:v1.14.1"

    def test_parse_tag_only(self):
        ref = RegistryReference.parse("ubuntu:22.04")
        assert ref.namespace is None
        assert ref.tag == "22.04"

    def test_empty_tag_is_no_tag(self):
        assert RegistryReference.parse("nginx:").tag is None

    @pytest.mark.parametrize("text", ["", "foo/", ":v1", "org/:v1", "/nginx"])
    def test_empty_parts_rejected(self, text):
        with pytest.raises(InvalidReferenceError) as exc_info:
            RegistryReference.parse(text)
        assert exc_info.value.code == "INVALID_REFERENCE"
        assert exc_info.value.details == {"reference": text}

    def test_with_namespace_keeps_existing(self):
        ref = RegistryReference.parse("bitnami/redis")
        assert ref.with_namespace("acme").namespace == "bitnami"
        assert RegistryReference.parse("redis").with_namespace("acme").name == "acme/redis"

    def test_with_tag_never_replaces_embedded_tag(self):
        ref = RegistryReference.parse("redis:7")
        assert ref.with_tag("8").tag == "7"
        assert RegistryReference.parse("redis").with_tag(None).tag == "latest"

    def test_repository_path_uses_default_namespace(self):
        assert RegistryReference.parse("nginx").repository_path() == "library/nginx"
        assert RegistryReference.parse("bitnami/nginx:1").repository_path() == "bitnami/nginx"


class TestCredential:
    """Tests for Credential."""

    @pytest.mark.parametrize("identity,token", [("", "t"), ("acme", ""), ("  ", "t")])
    def test_blank_fields_rejected(self, identity, token):
        with pytest.raises(ValidationError):
            Credential(identity=identity, token=token, identity_kind=IdentityKind.PERSONAL)

    def test_token_type(self, org_credential, personal_credential):
        assert org_credential.token_type == TokenType.OAT
        assert personal_credential.token_type == TokenType.PAT
        assert TokenType.OAT.identity_kind == IdentityKind.ORGANIZATION

    def test_repr_hides_token(self, org_credential):
        assert org_credential.token not in repr(org_credential)


class TestSession:
    """Tests for Session."""

    def test_initial_state(self):
        session = Session()
        assert session.authenticated is False
        assert session.identity is None
        assert session.token is None
        assert session.mode == SessionMode.PUBLIC_SEARCH

    def test_establish_organization(self, org_credential):
        session = Session()
        session.establish(org_credential)
        assert session.authenticated is True
        assert session.identity == "futuresecureai"
        assert session.mode == SessionMode.ORGANIZATION_SCOPED

    def test_establish_personal(self, personal_credential):
        session = Session()
        session.establish(personal_credential)
        assert session.mode == SessionMode.PUBLIC_SEARCH
        assert session.token == personal_credential.token

    def test_establish_only_once(self, org_credential, personal_credential):
        session = Session()
        session.establish(org_credential)
        with pytest.raises(SessionError):
            session.establish(personal_credential)
        assert session.identity == "futuresecureai"

    def test_process_wide_instance(self):
        assert get_session() is get_session()
        old = get_session()
        assert reset_session() is not old


class TestLocalImage:
    """Tests for LocalImage."""

    def test_short_id_and_size(self):
        image = LocalImage(reference="nginx:latest", image_id="sha256:" + "a" * 64, size=187_000_000)
        assert image.short_id == "a" * 12
        assert image.size_display == "187.0MB"
