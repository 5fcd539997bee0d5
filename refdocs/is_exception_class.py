"""Utility for recognising exception class-likes."""

from refdocs.documentable import Documentable


def is_exception_class(classlike: Documentable) -> bool:
    if classlike.is_exception:
        return True
    return any(f.sid.class_names == "Throwable" for f in classlike.functions)
