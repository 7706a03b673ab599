"""
Unit tests for identity value objects.

Tests cover:
- Email and username normalization and equality
- CI digit extraction and issuing department
- Phone classification, carrier and formatting
- Person names, password hashes, image references and permissions
"""

import pytest

from auditoria.modules.identity.domain.enums import Action, Resource
from auditoria.modules.identity.domain.errors import (
    EmptyFieldError,
    InvalidCiFormatError,
    InvalidEmailFormatError,
    InvalidImageUrlError,
    InvalidPasswordError,
    InvalidPermissionError,
    InvalidPersonNameError,
    InvalidPhoneFormatError,
    InvalidUsernameError,
)
from auditoria.modules.identity.domain.value_objects import (
    CI,
    Address,
    Email,
    HashedPassword,
    ImageUrl,
    Permission,
    PersonName,
    Phone,
    Username,
)


@pytest.mark.unit
class TestEmail:
    """Test suite for Email."""

    def test_normalizes_case_and_whitespace(self):
        """Test emails are trimmed and lowercased."""
        assert Email.create("  Ana.Quispe@Example.COM ").value == "ana.quispe@example.com"

    def test_equal_after_normalization(self):
        """Test equality compares normalized values."""
        assert Email.create("ANA@example.com") == Email.create("ana@example.com")

    @pytest.mark.parametrize("raw", ["", "ana", "ana@", "ana@example", "a b@example.com"])
    def test_rejects_malformed(self, raw):
        """Test malformed addresses raise."""
        with pytest.raises(InvalidEmailFormatError):
            Email.create(raw)

    def test_personal_vs_corporate(self):
        """Test webmail domains are flagged as personal."""
        assert Email.create("ana@gmail.com").is_personal_email
        assert Email.create("ana@contraloria.gob.bo").is_corporate_email


@pytest.mark.unit
class TestUsername:
    """Test suite for Username."""

    def test_normalizes(self):
        """Test usernames are lowercased and inner whitespace removed."""
        assert Username.create("  Ana Quispe ").value == "anaquispe"

    @pytest.mark.parametrize("raw", ["ab", "a" * 21, "ana.quispe", "_ana", "ana-"])
    def test_rejects_invalid(self, raw):
        """Test length, charset and edge character rules."""
        with pytest.raises(InvalidUsernameError):
            Username.create(raw)

    def test_blank_is_empty_field(self):
        """Test blank usernames report an empty field."""
        with pytest.raises(EmptyFieldError):
            Username.create("   ")


@pytest.mark.unit
class TestCI:
    """Test suite for CI."""

    @pytest.mark.parametrize(
        ("raw", "department"),
        [("12345678", "La Paz"), ("74567890", "Santa Cruz"), ("4123456", "Cochabamba")],
    )
    def test_department_from_first_digit(self, raw, department):
        """Test the first digit names the issuing department."""
        assert CI.create(raw).department == department

    def test_strips_non_digits(self):
        """Test separators and extensions are dropped."""
        ci = CI.create("1234567-8 LP")

        assert ci.value == "12345678"
        assert ci.formatted == "1234567-8 LP"

    @pytest.mark.parametrize("raw", ["abc", "123456", "12345678901", None])
    def test_rejects_invalid(self, raw):
        """Test fewer than 7 or more than 10 digits fail."""
        with pytest.raises(InvalidCiFormatError):
            CI.create(raw)


@pytest.mark.unit
class TestPhone:
    """Test suite for Phone."""

    def test_entel_mobile(self):
        """Test a 70 prefix is an Entel mobile."""
        phone = Phone.create("70123456")

        assert phone.is_mobile
        assert phone.carrier == "Entel"
        assert phone.formatted == "70-12-3456"
        assert phone.international == "+591 70123456"

    def test_landline(self):
        """Test landlines have no carrier."""
        phone = Phone.create("2-2123456")

        assert phone.is_landline
        assert phone.carrier is None
        assert phone.formatted == "2-212-3456"

    @pytest.mark.parametrize("raw", ["12345678", "7012345", "701234567"])
    def test_rejects_invalid(self, raw):
        """Test wrong length or leading digit."""
        with pytest.raises(InvalidPhoneFormatError):
            Phone.create(raw)

    def test_optional_blank_is_none(self):
        """Test blank optional phones are absent."""
        assert Phone.create_optional("  ") is None


@pytest.mark.unit
class TestPersonName:
    """Test suite for PersonName."""

    def test_capitalizes_each_word(self):
        """Test names are title cased word by word."""
        assert PersonName.create("  maría JOSÉ ").value == "María José"

    @pytest.mark.parametrize("raw", ["A", "Ana3", "x" * 51])
    def test_rejects_invalid(self, raw):
        """Test length and character rules."""
        with pytest.raises(InvalidPersonNameError):
            PersonName.create(raw, "nombres")

    def test_error_names_the_field(self):
        """Test the error points at the supplied field name."""
        with pytest.raises(EmptyFieldError) as exc_info:
            PersonName.create("", "apellidos")
        assert exc_info.value.details["field"] == "apellidos"


@pytest.mark.unit
class TestHashedPassword:
    """Test suite for HashedPassword."""

    @pytest.mark.parametrize(
        "raw", ["$2b$10$abcdefghijklmnopqrstuv", "$argon2id$v=19$m=65536", "$6$salt$hash"]
    )
    def test_accepts_known_formats(self, raw):
        """Test bcrypt, argon2 and crypt hashes."""
        assert HashedPassword.create(raw).value == raw

    def test_rejects_plain_text(self):
        """Test a plain text password is refused."""
        with pytest.raises(InvalidPasswordError):
            HashedPassword.create("Secreta123")

    def test_str_hides_hash(self):
        """Test the hash never renders."""
        assert str(HashedPassword.create("$2b$10$abc")) == "[HASHED_PASSWORD]"


@pytest.mark.unit
class TestImageUrlAndAddress:
    """Test suite for ImageUrl and Address."""

    @pytest.mark.parametrize(
        "raw", ["https://cdn.example.com/a.png", "avatars/a.jpg", "/uploads/avatars/a.webp"]
    )
    def test_image_accepts_urls_and_paths(self, raw):
        """Test URLs, relative image paths and absolute paths."""
        assert ImageUrl.create(raw).value == raw

    def test_image_rejects_garbage(self):
        """Test unsupported references raise."""
        with pytest.raises(InvalidImageUrlError):
            ImageUrl.create("not an image")

    def test_blank_optional_values_are_none(self):
        """Test blank image and address are absent."""
        assert ImageUrl.create("") is None
        assert Address.create("   ") is None

    def test_address_collapses_whitespace(self):
        """Test inner whitespace runs collapse to single spaces."""
        assert Address.create(" Av.  Arce   2345 ").value == "Av. Arce 2345"


@pytest.mark.unit
class TestPermission:
    """Test suite for Permission."""

    def test_from_string(self):
        """Test resource:action parsing and rendering."""
        permission = Permission.from_string("users:create")

        assert permission == Permission(Resource.USERS, Action.CREATE)
        assert str(permission) == "users:create"

    @pytest.mark.parametrize("raw", ["users", "users:fly", "ghosts:read", "a:b:c", ":read"])
    def test_rejects_invalid(self, raw):
        """Test malformed permission strings."""
        with pytest.raises(InvalidPermissionError):
            Permission.from_string(raw)
