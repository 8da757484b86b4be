"""Tests for resolving settings from SSM Parameter Store."""

import pytest
from botocore.exceptions import ClientError

from auth0cleanup.core.config import get_param_prefix, load_settings
from auth0cleanup.core.parameter_store import ParameterStoreResolver
from auth0cleanup.core.exceptions import ConfigurationError
from auth0cleanup.models.config import EXPECTED_KEYS, Settings

from conftest import make_client_error


def path_page(*pairs):
    return {"Parameters": [{"Name": name, "Value": value} for name, value in pairs]}


class TestHierarchicalLookup:
    def test_loads_recognised_keys_from_path(self, mock_ssm):
        mock_ssm.get_paginator.return_value.paginate.return_value = [
            path_page(
                ("/auth0-cleanup/AUTH0_DOMAIN", "tenant.auth0.com"),
                ("/auth0-cleanup/nested/AUTH0_CLIENT_ID", "cid"),
            ),
            path_page(("/auth0-cleanup/AUTH0_CLIENT_SECRET", "secret")),
        ]
        resolver = ParameterStoreResolver(mock_ssm, Settings())

        settings = resolver.resolve()

        assert settings.get("AUTH0_DOMAIN") == "tenant.auth0.com"
        assert settings.get("AUTH0_CLIENT_ID") == "cid"
        assert settings.get("AUTH0_CLIENT_SECRET") == "secret"
        mock_ssm.get_paginator.assert_called_once_with("get_parameters_by_path")
        mock_ssm.get_paginator.return_value.paginate.assert_called_once_with(
            Path="/auth0-cleanup/", Recursive=True, WithDecryption=True
        )

    def test_ignores_unrecognised_names(self, mock_ssm):
        mock_ssm.get_paginator.return_value.paginate.return_value = [
            path_page(("/auth0-cleanup/SOMETHING_ELSE", "x"))
        ]
        settings = ParameterStoreResolver(mock_ssm, Settings()).resolve()

        assert "SOMETHING_ELSE" not in settings.values

    def test_path_gets_trailing_separator(self, mock_ssm):
        ParameterStoreResolver(mock_ssm, Settings(), prefix="/custom").resolve()

        kwargs = mock_ssm.get_paginator.return_value.paginate.call_args.kwargs
        assert kwargs["Path"] == "/custom/"

    def test_non_path_prefix_skips_hierarchical_lookup(self, mock_ssm):
        ParameterStoreResolver(mock_ssm, Settings(), prefix="auth0-cleanup").resolve()

        mock_ssm.get_paginator.assert_not_called()
        mock_ssm.get_parameters.assert_called_once()

    def test_ssm_errors_propagate(self, mock_ssm):
        mock_ssm.get_paginator.return_value.paginate.side_effect = make_client_error(
            "AccessDeniedException", 400, "GetParametersByPath"
        )
        resolver = ParameterStoreResolver(mock_ssm, Settings())

        with pytest.raises(ClientError):
            resolver.resolve()
        assert resolver.loaded is False


class TestFlatFallback:
    def test_flat_lookup_alone_populates_all_keys(self, mock_ssm):
        mock_ssm.get_parameters.return_value = {
            "Parameters": [
                {"Name": f"auth0_cleanup_{key}", "Value": f"value-{key}"}
                for key in EXPECTED_KEYS
            ],
            "InvalidParameters": [],
        }

        settings = ParameterStoreResolver(mock_ssm, Settings()).resolve()

        for key in EXPECTED_KEYS:
            assert settings.get(key) == f"value-{key}"
        mock_ssm.get_parameters.assert_called_once_with(
            Names=[f"auth0_cleanup_{key}" for key in EXPECTED_KEYS],
            WithDecryption=True,
        )

    def test_only_missing_keys_are_requested(self, mock_ssm):
        mock_ssm.get_paginator.return_value.paginate.return_value = [
            path_page(
                ("/auth0-cleanup/S3_BUCKET", "bucket"),
                ("/auth0-cleanup/AUTH0_DOMAIN", "tenant.auth0.com"),
            )
        ]

        ParameterStoreResolver(mock_ssm, Settings()).resolve()

        names = mock_ssm.get_parameters.call_args.kwargs["Names"]
        assert "auth0_cleanup_S3_BUCKET" not in names
        assert "auth0_cleanup_AUTH0_DOMAIN" not in names
        assert "auth0_cleanup_AUTH0_CLIENT_ID" in names

    def test_no_flat_lookup_when_nothing_missing(self, mock_ssm):
        settings = Settings({key: "set" for key in EXPECTED_KEYS})

        ParameterStoreResolver(mock_ssm, settings).resolve()

        mock_ssm.get_parameters.assert_not_called()

    def test_invalid_parameters_logged_not_fatal(self, mock_ssm, caplog):
        mock_ssm.get_parameters.return_value = {
            "Parameters": [],
            "InvalidParameters": ["auth0_cleanup_SSOID", "auth0_cleanup_S3_KEY"],
        }

        with caplog.at_level("WARNING"):
            settings = ParameterStoreResolver(mock_ssm, Settings()).resolve()

        assert settings.get("SSOID") is None
        assert "Missing SSM params: auth0_cleanup_SSOID, auth0_cleanup_S3_KEY" in caplog.text

    def test_flat_names_must_start_with_prefix(self, mock_ssm):
        mock_ssm.get_parameters.return_value = {
            "Parameters": [{"Name": "other_auth0_cleanup_S3_BUCKET", "Value": "x"}],
            "InvalidParameters": [],
        }

        settings = ParameterStoreResolver(mock_ssm, Settings()).resolve()

        assert settings.get("S3_BUCKET") is None


class TestPrecedence:
    def test_environment_value_beats_both_store_phases(self, mock_ssm):
        mock_ssm.get_paginator.return_value.paginate.return_value = [
            path_page(("/auth0-cleanup/AUTH0_DOMAIN", "from-path.auth0.com"))
        ]
        mock_ssm.get_parameters.return_value = {
            "Parameters": [
                {"Name": "auth0_cleanup_AUTH0_DOMAIN", "Value": "from-flat.auth0.com"},
                {"Name": "auth0_cleanup_S3_BUCKET", "Value": "flat-bucket"},
            ],
            "InvalidParameters": [],
        }
        settings = load_settings(
            {"AUTH0_DOMAIN": "from-env.auth0.com", "S3_BUCKET": "env-bucket"}
        )

        ParameterStoreResolver(mock_ssm, settings).resolve()

        assert settings.get("AUTH0_DOMAIN") == "from-env.auth0.com"
        assert settings.get("S3_BUCKET") == "env-bucket"

    def test_path_value_beats_flat_value(self, mock_ssm):
        mock_ssm.get_paginator.return_value.paginate.return_value = [
            path_page(("/auth0-cleanup/S3_BUCKET", "path-bucket"))
        ]
        mock_ssm.get_parameters.return_value = {
            "Parameters": [{"Name": "auth0_cleanup_S3_BUCKET", "Value": "flat-bucket"}],
            "InvalidParameters": [],
        }

        settings = ParameterStoreResolver(mock_ssm, Settings()).resolve()

        assert settings.get("S3_BUCKET") == "path-bucket"


class TestIdempotence:
    def test_second_resolve_makes_no_calls(self, mock_ssm):
        resolver = ParameterStoreResolver(mock_ssm, Settings())

        first = resolver.resolve()
        second = resolver.resolve()

        assert first is second
        assert resolver.loaded is True
        mock_ssm.get_paginator.assert_called_once()
        mock_ssm.get_parameters.assert_called_once()


class TestLazyValidation:
    def test_missing_required_key_fails_on_use(self, mock_ssm):
        settings = ParameterStoreResolver(mock_ssm, Settings()).resolve()

        with pytest.raises(ConfigurationError) as exc_info:
            settings.require("AUTH0_CLIENT_ID")
        assert str(exc_info.value) == "Missing AUTH0_CLIENT_ID"

    def test_param_prefix_from_environment(self):
        assert get_param_prefix({}) == "/auth0-cleanup/"
        assert get_param_prefix({"PARAM_PREFIX": " /other/ "}) == "/other/"
