"""Resolution of extension receivers to the class-like they extend."""

from refdocs.documentable import Documentable
from refdocs.errors import InternalConsistencyError
from refdocs.sid import Sid
from refdocs.type_ref import TypeKind, TypeRef

# Receivers with no page of their own; such extensions stay package-level.
_PAGELESS = frozenset(
    {
        TypeKind.JAVA_OBJECT,
        TypeKind.PRIMITIVE,
        TypeKind.VOID,
        TypeKind.TYPE_ALIAS,
        TypeKind.FUNCTIONAL,
        TypeKind.TYPE_PARAMETER,
        TypeKind.DYNAMIC,
    }
)


def receiver_sid(receiver: TypeRef | None, owner: Documentable) -> Sid | None:
    """SID of the class-like ``owner`` extends, or None if it has no page.

    Raises InternalConsistencyError for receivers the analyzer failed to resolve.
    """
    if receiver is None:
        return None
    if receiver.kind is TypeKind.GENERIC:
        return receiver.sid
    if receiver.kind in (TypeKind.NULLABLE, TypeKind.DEFINITELY_NON_NULL):
        return receiver_sid(receiver.inner, owner)
    if receiver.kind in _PAGELESS:
        return None
    if receiver.kind is TypeKind.UNRESOLVED:
        msg = f"Unresolved receiver of {owner.sid}: {receiver.name}"
        raise InternalConsistencyError(msg)
    msg = f"Unknown receiver kind {receiver.kind} of {owner.sid}"
    raise InternalConsistencyError(msg)


def type_sid_or_none(type_ref: TypeRef | None) -> Sid | None:
    """Lenient variant: the SID a type points at, if any."""
    if type_ref is None:
        return None
    if type_ref.kind in (TypeKind.NULLABLE, TypeKind.DEFINITELY_NON_NULL):
        return type_sid_or_none(type_ref.inner)
    if type_ref.kind in (TypeKind.GENERIC, TypeKind.TYPE_ALIAS):
        return type_ref.sid
    return None
