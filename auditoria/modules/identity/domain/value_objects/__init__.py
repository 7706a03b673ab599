"""Identity value objects."""

from auditoria.modules.identity.domain.value_objects.address import Address
from auditoria.modules.identity.domain.value_objects.ci import CI
from auditoria.modules.identity.domain.value_objects.email import Email
from auditoria.modules.identity.domain.value_objects.hashed_password import HashedPassword
from auditoria.modules.identity.domain.value_objects.image_url import ImageUrl
from auditoria.modules.identity.domain.value_objects.permission import Permission
from auditoria.modules.identity.domain.value_objects.person_name import PersonName
from auditoria.modules.identity.domain.value_objects.phone import Phone
from auditoria.modules.identity.domain.value_objects.username import Username

__all__ = [
    "CI",
    "Address",
    "Email",
    "HashedPassword",
    "ImageUrl",
    "Permission",
    "PersonName",
    "Phone",
    "Username",
]
