"""
Template compilation.

A page or post template is compiled together with the layout's partials.
Partials are plain Jinja2 templates, registered under their file name, so
the main template can ``{% include "header.html" %}`` or
``{% extends "base.html" %}`` them. Macros defined at the top level of a
partial are also callable directly from the main template:

    {# partials/figure.html #}
    {% macro figure(post) %}<img src="{{ post.file }}">{% endmacro %}

    {# post.html #}
    {{ figure(post) }}

A macro name may be defined only once across the partials and the main
template.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from jinja2 import DictLoader, Environment, Template, TemplateSyntaxError, nodes

from photoblog.errors import TemplateParseError, TemplateReadError
from photoblog.filters import FILTERS


@dataclass(frozen=True)
class Partial:
    name: str
    source: str


def read_partials(paths: Sequence[Path]) -> list[Partial]:
    """Read partial sources in the given order."""
    partials = []
    for path in paths:
        path = Path(path)
        try:
            source = path.read_text(encoding="utf-8")
        except OSError as e:
            raise TemplateReadError(f"cannot read partial: {e.strerror}", path) from e
        partials.append(Partial(name=path.name, source=source))
    return partials


def make_environment(partials: Sequence[Partial]) -> Environment:
    env = Environment(
        loader=DictLoader({p.name: p.source for p in partials}),
        autoescape=True,
    )
    env.filters.update(FILTERS)
    return env


def compile_template(template_path: Path, partials: Sequence[Partial] = ()) -> Template:
    """Compile ``template_path`` against ``partials``.

    Partials are parsed first, in order, then the main template. Raises
    TemplateReadError when the template can't be read and TemplateParseError
    on a syntax error or a redefined partial or macro.
    """
    template_path = Path(template_path)
    try:
        source = template_path.read_text(encoding="utf-8")
    except OSError as e:
        raise TemplateReadError(f"cannot read template: {e.strerror}", template_path) from e

    env = make_environment(partials)

    defined: dict[str, str] = {}
    seen_partials = set()
    for partial in partials:
        if partial.name in seen_partials:
            raise TemplateParseError("partial defined twice", partial.name)
        seen_partials.add(partial.name)

        ast = _parse(env, partial.source, partial.name)
        macros = _top_level_macros(ast)
        for macro in macros:
            _define(defined, macro.name, partial.name)
        if macros:
            env.globals.update(_export_macros(env, macros, partial.name))

    ast = _parse(env, source, template_path.name, str(template_path))
    for macro in _top_level_macros(ast):
        _define(defined, macro.name, template_path.name)

    try:
        return env.from_string(ast)
    except TemplateSyntaxError as e:
        raise TemplateParseError(e.message or str(e), template_path, e.lineno) from e


def _parse(env: Environment, source: str, name: str, filename: str | None = None) -> nodes.Template:
    try:
        return env.parse(source, name=name, filename=filename)
    except TemplateSyntaxError as e:
        raise TemplateParseError(e.message or str(e), filename or name, e.lineno) from e


def _top_level_macros(ast: nodes.Template) -> list[nodes.Macro]:
    return [node for node in ast.body if isinstance(node, nodes.Macro)]


def _define(defined: dict[str, str], macro: str, owner: str):
    if macro in defined:
        raise TemplateParseError(
            f"macro {macro!r} already defined in {defined[macro]}", owner
        )
    defined[macro] = owner


def _export_macros(env: Environment, macros: list[nodes.Macro], name: str) -> dict:
    # compile just the macro definitions so exporting them never runs the
    # partial's own output, which may need variables only a page provides
    module_ast = nodes.Template(list(macros), lineno=1)
    module_ast.set_environment(env)
    try:
        module = env.from_string(module_ast).module
    except TemplateSyntaxError as e:
        raise TemplateParseError(e.message or str(e), name, e.lineno) from e
    # jinja keeps underscore-prefixed macros private to their module
    return {
        macro.name: getattr(module, macro.name)
        for macro in macros
        if not macro.name.startswith("_")
    }
