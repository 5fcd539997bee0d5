"""Rules for which companion members surface on the enclosing class."""

from refdocs.documentable import Documentable, Kind
from refdocs.language import Language

JVM_STATIC = "kotlin.jvm.JvmStatic"
JVM_FIELD = "kotlin.jvm.JvmField"


def is_hoisted_from_companion(d: Documentable, language: Language) -> bool:
    """Whether companion member ``d`` is documented on the outer class in ``language``."""
    if language is Language.KOTLIN:
        return d.kind in (Kind.FUNCTION, Kind.PROPERTY)
    if d.kind is Kind.FUNCTION:
        return d.has_annotation(JVM_STATIC)
    if d.kind is Kind.PROPERTY:
        return (
            d.has_annotation(JVM_FIELD)
            or d.has_modifier("lateinit")
            or d.has_modifier("const")
        )
    return False
