"""Per-language resolution of what gets displayed, computed on the event loop.

The holder is created once per rendering view. Construction schedules every
derived collection as an asyncio task; accessors await the relevant task, so
each value is computed exactly once no matter how many pages ask for it.
"""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Coroutine, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from refdocs.async_memo import AsyncMemo
from refdocs.class_graph import ClassGraph, compute_class_graph, compute_documentables_graph
from refdocs.companion_of import companion_of
from refdocs.doc_node import DocNode
from refdocs.documentable import Documentable, Kind, Module
from refdocs.documentable_sort_keys import simple_sort_key
from refdocs.errors import InternalConsistencyError
from refdocs.expect_or_common_source_set import expect_or_common_source_set
from refdocs.exploded_children import exploded_children
from refdocs.external_classlike_provider import ExternalClasslikeProvider
from refdocs.getters_and_setters import getters_and_setters
from refdocs.is_exception_class import is_exception_class
from refdocs.is_hoisted_from_companion import is_hoisted_from_companion
from refdocs.language import Language
from refdocs.receiver_sid import receiver_sid, type_sid_or_none
from refdocs.sid import Sid
from refdocs.synthetic_classes import synthetic_classes
from refdocs.visibility_context import VisibilityContext

logger = logging.getLogger(__name__)

COMPANION_NAME = "Companion"


class Boringness(Enum):
    """How much a companion object has to show in each view."""

    ALWAYS_BORING = "always_boring"
    JAVA_ONLY_BORING = "java_only_boring"
    KOTLIN_ONLY_BORING = "kotlin_only_boring"
    NEVER_BORING = "never_boring"

    def interesting_in(self, language: Language) -> bool:
        return (
            self is Boringness.NEVER_BORING
            or (language is Language.JAVA and self is Boringness.KOTLIN_ONLY_BORING)
            or (language is Language.KOTLIN and self is Boringness.JAVA_ONLY_BORING)
        )


@dataclass
class _PackageTasks:
    children: asyncio.Task
    companions: asyncio.Task
    interestingness: asyncio.Task
    synthetic: asyncio.Task
    all_classlikes: asyncio.Task
    objects: asyncio.Task
    interesting_objects: asyncio.Task
    displayed: asyncio.Task


class DocumentablesHolder:
    """Answers "what is displayed, and where" for one language view.

    Must be constructed while an event loop is running.
    """

    def __init__(
        self,
        display_language: Language,
        module: Module,
        visibility: VisibilityContext,
        *,
        excluded_packages: Iterable[str] = (),
        external_classlikes: ExternalClasslikeProvider | None = None,
    ) -> None:
        self.display_language = display_language
        self.module = module
        self.visibility = visibility
        self.external_classlikes = external_classlikes
        self._excluded = [re.compile(p) for p in excluded_packages]
        self._loop = asyncio.get_running_loop()
        self._tasks: list[asyncio.Task] = []
        self._nested = AsyncMemo[list[Documentable]]()

        self._packages = self._launch(self._compute_packages())
        self._extension_functions = self._launch(self._compute_extension_functions())
        self._extension_properties = self._launch(self._compute_extension_properties())
        self._per_package = {p.sid: self._start_package(p) for p in module.packages}
        self._all_classlikes = self._launch(self._compute_all_classlikes_to_display())
        self._class_graph = self._launch(self._compute_class_graph())
        self._documentables_graph = self._launch(self._compute_documentables_graph())
        self._nested_wave = self._launch(self._start_nested_classlikes())

    def _launch(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        task = self._loop.create_task(coro)
        self._tasks.append(task)
        return task

    async def join(self) -> None:
        """Wait for every scheduled computation; re-raise the first failure."""
        results = await asyncio.gather(*self._tasks, return_exceptions=True)
        for result in results:
            if isinstance(result, BaseException):
                raise result

    # ------------------------------------------------------------------
    # per-package chain
    # ------------------------------------------------------------------

    def _start_package(self, package: Documentable) -> _PackageTasks:
        children = self._launch(self._explode(package))
        companions = self._launch(self._compute_companions(children))
        interestingness = self._launch(self._compute_interestingness(companions))
        synthetic = self._launch(self._compute_synthetic(package))
        all_classlikes = self._launch(self._compute_all_classlikes(children, synthetic))
        objects = self._launch(self._compute_objects(all_classlikes, companions))
        checked = self._launch(self._check_companion_names(objects))
        interesting = self._launch(
            self._compute_interesting_objects(interestingness, objects)
        )
        displayed = self._launch(
            self._compute_displayed(all_classlikes, interesting, checked)
        )
        return _PackageTasks(
            children=children,
            companions=companions,
            interestingness=interestingness,
            synthetic=synthetic,
            all_classlikes=all_classlikes,
            objects=objects,
            interesting_objects=interesting,
            displayed=displayed,
        )

    async def _explode(self, package: Documentable) -> list[Documentable]:
        return exploded_children(package)

    async def _compute_companions(self, children: asyncio.Task) -> dict[Sid, Documentable]:
        result = {}
        for d in await children:
            if d.is_classlike:
                companion = companion_of(d)
                if companion is not None:
                    result[companion.sid] = companion
        return result

    async def _compute_interestingness(
        self, companions: asyncio.Task
    ) -> dict[Sid, Boringness]:
        return {sid: await self._boringness(c) for sid, c in (await companions).items()}

    async def _compute_synthetic(self, package: Documentable) -> list[Documentable]:
        if self.display_language is not Language.JAVA:
            return []
        return synthetic_classes(package)

    async def _compute_all_classlikes(
        self, children: asyncio.Task, synthetic: asyncio.Task
    ) -> list[Documentable]:
        return [d for d in await children if d.is_classlike] + await synthetic

    async def _compute_objects(
        self, all_classlikes: asyncio.Task, companions: asyncio.Task
    ) -> list[Documentable]:
        companion_sids = (await companions).keys()
        return [
            d
            for d in await all_classlikes
            if d.kind is Kind.OBJECT and d.sid not in companion_sids
        ]

    async def _check_companion_names(self, objects: asyncio.Task) -> None:
        illegal = [str(o.sid) for o in await objects if o.name == COMPANION_NAME]
        if illegal:
            msg = (
                "Object with illegal name: named 'Companion' but is not a "
                f"companion object: {', '.join(illegal)}"
            )
            raise InternalConsistencyError(msg)

    async def _compute_interesting_objects(
        self, interestingness: asyncio.Task, objects: asyncio.Task
    ) -> frozenset[Sid]:
        interesting = {
            sid
            for sid, boringness in (await interestingness).items()
            if boringness.interesting_in(self.display_language)
        }
        interesting.update(o.sid for o in await objects)
        return frozenset(interesting)

    async def _compute_displayed(
        self,
        all_classlikes: asyncio.Task,
        interesting: asyncio.Task,
        checked: asyncio.Task,
    ) -> list[Documentable]:
        await checked
        interesting_sids = await interesting
        shown = [
            d
            for d in await all_classlikes
            if not self.visibility.has_been_hidden(d.sid)
            and (d.kind is not Kind.OBJECT or d.sid in interesting_sids)
        ]
        return sorted(shown, key=simple_sort_key)

    # ------------------------------------------------------------------
    # whole-module values
    # ------------------------------------------------------------------

    def is_excluded(self, package_name: str) -> bool:
        return any(r.fullmatch(package_name) for r in self._excluded)

    async def _compute_packages(self) -> list[Documentable]:
        packages = [p for p in self.module.packages if not self.is_excluded(p.name)]
        return sorted(packages, key=simple_sort_key)

    async def _compute_extension_functions(self) -> dict[Sid, list[Documentable]]:
        result: dict[Sid, list[Documentable]] = {}
        for package in await self._packages:
            callables = list(package.functions)
            if self.display_language is Language.JAVA:
                callables.extend(getters_and_setters(package.properties))
            for function in callables:
                sid = receiver_sid(function.receiver, function)
                if sid is not None:
                    result.setdefault(sid, []).append(function)
        return result

    async def _compute_extension_properties(self) -> dict[Sid, list[Documentable]]:
        result: dict[Sid, list[Documentable]] = {}
        if self.display_language is not Language.KOTLIN:
            return result
        for package in await self._packages:
            for prop in package.properties:
                sid = type_sid_or_none(prop.receiver)
                if sid is not None:
                    result.setdefault(sid, []).append(prop)
        return result

    async def _compute_all_classlikes_to_display(self) -> list[Documentable]:
        result = []
        for package in await self._packages:
            result.extend(await self._per_package[package.sid].displayed)
        return result

    async def _compute_class_graph(self) -> ClassGraph:
        return compute_class_graph(
            await self._all_classlikes,
            self.visibility,
            self.external_classlikes,
            self.module.source_sets,
        )

    async def _compute_documentables_graph(self) -> dict[Sid, Documentable]:
        return compute_documentables_graph(await self._class_graph)

    async def _start_nested_classlikes(self) -> None:
        for package in await self._packages:
            for classlike in await self._per_package[package.sid].all_classlikes:
                self._nested.start(
                    classlike.sid,
                    lambda c=classlike: self._compute_classlikes(exploded_children(c)),
                )

    async def _compute_classlikes(
        self, documentables: Iterable[Documentable]
    ) -> list[Documentable]:
        result = []
        for d in documentables:
            if not d.is_classlike or self.is_excluded(d.sid.package):
                continue
            if self.visibility.has_been_hidden(d.sid):
                continue
            if d.kind is Kind.OBJECT and d.sid not in await self._interesting_sids(d):
                continue
            result.append(d)
        return sorted(result, key=simple_sort_key)

    async def _interesting_sids(self, d: Documentable) -> frozenset[Sid]:
        tasks = self._per_package.get(d.sid.package_sid)
        if tasks is None:
            return frozenset()
        return await tasks.interesting_objects

    async def _boringness(self, companion: Documentable) -> Boringness:
        if companion.name != COMPANION_NAME:
            return Boringness.NEVER_BORING
        if (await self._extension_functions).get(companion.sid):
            return Boringness.NEVER_BORING
        if (await self._extension_properties).get(companion.sid):
            return Boringness.NEVER_BORING
        if any(companion.supertypes.values()):
            return Boringness.NEVER_BORING

        boring_in_java = all(
            is_hoisted_from_companion(c, Language.JAVA) for c in companion.children
        ) and all(
            is_hoisted_from_companion(a, Language.JAVA)
            for a in getters_and_setters(companion.properties)
        )
        boring_in_kotlin = all(
            is_hoisted_from_companion(c, Language.KOTLIN) for c in companion.children
        )
        if boring_in_java and boring_in_kotlin:
            return Boringness.ALWAYS_BORING
        if boring_in_java:
            return Boringness.JAVA_ONLY_BORING
        if boring_in_kotlin:
            return Boringness.KOTLIN_ONLY_BORING
        return Boringness.NEVER_BORING

    # ------------------------------------------------------------------
    # accessors
    # ------------------------------------------------------------------

    def _tasks_for(self, package: Documentable) -> _PackageTasks:
        tasks = self._per_package.get(package.sid)
        if tasks is None:
            msg = f"Package {package.name} is not part of module {self.module.name}"
            raise InternalConsistencyError(msg)
        return tasks

    async def packages(self) -> list[Documentable]:
        return await self._packages

    async def classlikes_to_display(self, package: Documentable) -> list[Documentable]:
        return await self._tasks_for(package).displayed

    async def interfaces_for(self, package: Documentable) -> list[Documentable]:
        return await self._displayed_of_kind(package, Kind.INTERFACE)

    async def enums_for(self, package: Documentable) -> list[Documentable]:
        return await self._displayed_of_kind(package, Kind.ENUM)

    async def annotations_for(self, package: Documentable) -> list[Documentable]:
        return await self._displayed_of_kind(package, Kind.ANNOTATION)

    async def objects_for(self, package: Documentable) -> list[Documentable]:
        return await self._displayed_of_kind(package, Kind.OBJECT)

    async def exceptions_for(self, package: Documentable) -> list[Documentable]:
        return [
            d for d in await self.classlikes_to_display(package) if is_exception_class(d)
        ]

    async def typealiases_for(self, package: Documentable) -> list[Documentable]:
        if self.is_excluded(package.name):
            return []
        return sorted(package.typealiases, key=simple_sort_key)

    async def _displayed_of_kind(
        self, package: Documentable, kind: Kind
    ) -> list[Documentable]:
        return [d for d in await self.classlikes_to_display(package) if d.kind is kind]

    async def synthetic_classes_for(self, package: Documentable) -> list[Documentable]:
        return await self._tasks_for(package).synthetic

    async def interesting_objects_for(self, package: Documentable) -> frozenset[Sid]:
        return await self._tasks_for(package).interesting_objects

    async def interestingness(self, companion: Documentable) -> Boringness:
        tasks = self._tasks_for(self._package_of(companion))
        return (await tasks.interestingness).get(companion.sid, Boringness.NEVER_BORING)

    async def is_companion(self, d: Documentable) -> bool:
        tasks = self._per_package.get(d.sid.package_sid)
        return tasks is not None and d.sid in await tasks.companions

    async def is_from_synthetic_class(self, sid: Sid) -> bool:
        tasks = self._per_package.get(sid.package_sid)
        if tasks is None or sid.class_names is None:
            return False
        return any(c.sid.class_names == sid.class_names for c in await tasks.synthetic)

    async def nested_classlikes_of(self, classlike: Documentable) -> list[Documentable]:
        await self._nested_wave
        return await self._nested.get(
            classlike.sid,
            lambda: self._compute_classlikes(exploded_children(classlike)),
        )

    async def extension_functions_of(self, classlike: Documentable) -> list[Documentable]:
        return (await self._extension_functions).get(classlike.sid, [])

    async def extension_properties_of(self, classlike: Documentable) -> list[Documentable]:
        return (await self._extension_properties).get(classlike.sid, [])

    async def all_classlikes_to_display(self) -> list[Documentable]:
        return await self._all_classlikes

    async def class_graph(self) -> ClassGraph:
        return await self._class_graph

    async def documentables_graph(self) -> dict[Sid, Documentable]:
        return await self._documentables_graph

    def _package_of(self, d: Documentable) -> Documentable:
        for package in self.module.packages:
            if package.sid == d.sid.package_sid:
                return package
        msg = f"No package for {d.sid}"
        raise InternalConsistencyError(msg)

    def print_warning_for(
        self,
        message: str,
        documentable: Documentable,
        containing: Documentable | None = None,
        broken_tag: DocNode | None = None,
        additional_context: str = "",
    ) -> None:
        """Log a documentation problem with the location it was found at."""
        containing_info = ""
        if broken_tag is not None:
            tag_name = broken_tag.name.capitalize()
            # @param, not @Param
            if message.endswith("@"):
                tag_name = tag_name.lower()
            containing_info += tag_name
            if broken_tag.text:
                containing_info += f" {broken_tag.text.split()[0]}"
        containing_info += f" in {documentable.kind.value} {documentable.name}"
        location = error_location(containing or documentable)
        logger.warning("%s %s%s%s", location, message, containing_info, additional_context)


def error_location(d: Documentable) -> str:
    if not d.sources:
        return "Unknown location"
    source = None
    if d.source_sets:
        source = d.sources.get(expect_or_common_source_set(d))
    source = source or next(iter(d.sources.values()))
    if source.line is None:
        return source.path
    return f"{source.path}:{source.line}"
