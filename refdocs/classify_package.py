"""Logic for splitting a package's displayed class-likes into index sections."""

from refdocs.documentable import Documentable, Kind
from refdocs.documentables_holder import DocumentablesHolder
from refdocs.is_exception_class import is_exception_class
from refdocs.language import Language

SECTION_TITLES = {
    "interfaces": "Interfaces",
    "classes": "Classes",
    "enums": "Enums",
    "exceptions": "Exceptions",
    "annotations": "Annotations",
    "objects": "Objects",
}


async def classify_package(
    holder: DocumentablesHolder, package: Documentable
) -> dict[str, list[Documentable]]:
    """Section name -> class-likes, in ``SECTION_TITLES`` order.

    The Java view has no objects section; objects are listed with classes.
    """
    classes = [
        d
        for d in await holder.classlikes_to_display(package)
        if d.kind is Kind.CLASS and not is_exception_class(d)
    ]
    objects = await holder.objects_for(package)
    if holder.display_language is Language.JAVA:
        classes = sorted([*classes, *objects], key=lambda d: d.sid.class_names or "")
        objects = []
    return {
        "interfaces": await holder.interfaces_for(package),
        "classes": classes,
        "enums": await holder.enums_for(package),
        "exceptions": await holder.exceptions_for(package),
        "annotations": await holder.annotations_for(package),
        "objects": objects,
    }
