"""Tests for SNMP session configuration."""

import pytest
from pysnmp.hlapi.v3arch.asyncio import (
    USM_AUTH_HMAC96_MD5,
    USM_AUTH_HMAC96_SHA,
    USM_AUTH_NONE,
    USM_PRIV_CBC56_DES,
    USM_PRIV_CFB128_AES,
    USM_PRIV_NONE,
    CommunityData,
    UsmUserData,
)

from snmp_inventory.adapters.snmp.session import (
    configure,
    resolve_auth_protocol,
    resolve_priv_protocol,
)
from snmp_inventory.core.config import Settings
from snmp_inventory.core.models import (
    AuthenticationSettings,
    DeviceDescriptor,
    PrivacySettings,
    SNMPSettings,
)


def _descriptor(version="3", auth=None, priv=None, community="monitor"):
    return DeviceDescriptor(
        host="192.0.2.20",
        snmp=SNMPSettings(
            version=version,
            community=community,
            authentication=auth or AuthenticationSettings(),
            privacy=priv or PrivacySettings(),
        ),
    )


@pytest.mark.parametrize(
    "auth,priv",
    [
        (None, None),
        (AuthenticationSettings(active=True, protocol="MD5", passphrase="a"), None),
        (
            AuthenticationSettings(active=True, protocol="SHA1", passphrase="a"),
            PrivacySettings(active=True, protocol="AES", passphrase="p"),
        ),
    ],
)
def test_v2c_never_gets_security(auth, priv):
    """Test that v2c sessions ignore configured auth and privacy."""
    params = configure(_descriptor(version="2c", auth=auth, priv=priv))

    assert params.version == "2c"
    assert params.security is None


def test_v3_without_auth_or_privacy_has_no_security():
    """Test that v3 degrades to version-only security."""
    params = configure(_descriptor(version="3"))

    assert params.version == "3"
    assert params.security is None


def test_v3_with_auth_only():
    """Test that only the authentication half of the bundle is set."""
    params = configure(
        _descriptor(
            auth=AuthenticationSettings(active=True, protocol="MD5", passphrase="authpass1")
        )
    )

    assert params.security is not None
    assert params.security.user_name == "monitor"
    assert params.security.auth_protocol == USM_AUTH_HMAC96_MD5
    assert params.security.auth_passphrase == "authpass1"
    assert params.security.priv_protocol is None
    assert params.security.priv_passphrase is None


def test_v3_with_privacy_only():
    """Test that privacy alone is enough to attach a bundle."""
    params = configure(
        _descriptor(priv=PrivacySettings(active=True, protocol="AES", passphrase="privpass1"))
    )

    assert params.security is not None
    assert params.security.auth_protocol is None
    assert params.security.priv_protocol == USM_PRIV_CFB128_AES
    assert params.security.priv_passphrase == "privpass1"


def test_unknown_auth_protocol_defaults_to_sha():
    """Test the lenient fallback for authentication protocols."""
    params = configure(
        _descriptor(
            auth=AuthenticationSettings(active=True, protocol="SHA512", passphrase="x")
        )
    )

    assert params.security.auth_protocol == USM_AUTH_HMAC96_SHA


def test_protocol_resolution():
    """Test the known and fallback protocol names."""
    assert resolve_auth_protocol(AuthenticationSettings(protocol="SHA1")) == USM_AUTH_HMAC96_SHA
    assert resolve_auth_protocol(AuthenticationSettings(protocol="MD5")) == USM_AUTH_HMAC96_MD5
    assert resolve_auth_protocol(AuthenticationSettings(protocol="")) == USM_AUTH_HMAC96_SHA
    assert resolve_priv_protocol(PrivacySettings(protocol="AES")) == USM_PRIV_CFB128_AES
    assert resolve_priv_protocol(PrivacySettings(protocol="DES")) == USM_PRIV_CBC56_DES
    assert resolve_priv_protocol(PrivacySettings(protocol="3DES")) == USM_PRIV_CBC56_DES


def test_unknown_version_uses_v2c():
    """Test that an unrecognized version falls back to community access."""
    params = configure(
        _descriptor(
            version="1",
            auth=AuthenticationSettings(active=True, protocol="MD5", passphrase="x"),
        )
    )

    assert params.version == "2c"
    assert params.security is None


def test_fixed_transport_settings():
    """Test that timeout, retries and port come from the settings."""
    config = Settings(snmp_timeout=1.5, snmp_retries=0, snmp_port=1161)
    params = configure(_descriptor(), config)

    assert params.target == "192.0.2.20"
    assert params.timeout == 1.5
    assert params.retries == 0
    assert params.port == 1161


def test_auth_data_types():
    """Test the pysnmp credentials built for each version."""
    assert isinstance(configure(_descriptor(version="2c")).auth_data(), CommunityData)
    assert isinstance(configure(_descriptor(version="3")).auth_data(), UsmUserData)

    secured = configure(
        _descriptor(
            auth=AuthenticationSettings(active=True, protocol="SHA1", passphrase="authpass1"),
            priv=PrivacySettings(active=True, protocol="DES", passphrase="privpass1"),
        )
    ).auth_data()
    assert isinstance(secured, UsmUserData)
    assert secured.userName == "monitor"
    assert secured.authentication_protocol == USM_AUTH_HMAC96_SHA
    assert secured.privacy_protocol == USM_PRIV_CBC56_DES
    assert secured.security_level == "authPriv"


def test_auth_data_auth_only_and_unknown_names():
    """Test that resolved protocols reach the pysnmp user data."""
    auth_only = configure(
        _descriptor(auth=AuthenticationSettings(active=True, protocol="MD5", passphrase="authpass1"))
    ).auth_data()
    assert auth_only.authentication_protocol == USM_AUTH_HMAC96_MD5
    assert auth_only.privacy_protocol == USM_PRIV_NONE
    assert auth_only.security_level == "authNoPriv"

    fallback = configure(
        _descriptor(
            auth=AuthenticationSettings(active=True, protocol="bogus", passphrase="authpass1"),
            priv=PrivacySettings(active=True, protocol="bogus", passphrase="privpass1"),
        )
    ).auth_data()
    assert fallback.authentication_protocol == USM_AUTH_HMAC96_SHA
    assert fallback.privacy_protocol == USM_PRIV_CBC56_DES


def test_auth_data_v3_without_security_is_no_auth():
    """Test that v3 without auth or privacy sends a bare USM user."""
    data = configure(_descriptor(version="3")).auth_data()
    assert data.userName == "monitor"
    assert data.authentication_protocol == USM_AUTH_NONE
    assert data.security_level == "noAuthNoPriv"


def test_session_params_repr_hides_secrets():
    """Test that session parameters are safe to log."""
    params = configure(
        _descriptor(
            community="topsecret",
            auth=AuthenticationSettings(active=True, protocol="SHA1", passphrase="authpass1"),
        )
    )
    text = repr(params)

    assert "authpass1" not in text
    assert "topsecret" not in text
