"""Asset pipeline tasks.

Every task is a function of an :class:`~webic.config.AppConfig`: the config's
``environment`` picks the development or production branch and its output
paths. Tasks return a :class:`~webic.assets.results.TaskResult`; tasks that
can hit a compile error turn the error into a failed result instead of
raising, so the sequence they belong to keeps going.

| Task             | development                    | production                              |
|------------------|--------------------------------|-----------------------------------------|
| compile-markup   | copy, whitespace kept          | minified, comments stripped             |
| compile-styles   | expanded + source map          | compressed, prefixed, minified          |
| compile-scripts  | bundled                        | bundled, transpiled, minified           |
| compile-media    | changed files copied           | changed files copied and optimized      |
| compile-misc     | copied                         | copied                                  |
| clean            | ``.dev`` removed               | ``build`` removed                       |
"""

from __future__ import annotations

import functools
import io
import shutil
import time
from collections.abc import Callable, Iterable
from pathlib import Path

import dukpy
import minify_html
import rcssmin
import rjsmin
import sass
from PIL import Image

from webic.assets.bundler import bundle
from webic.assets.prefixer import add_vendor_prefixes
from webic.assets.results import TaskResult
from webic.config import AppConfig
from webic.errors import BundleError
from webic.utils import ensure_dir, is_newer

BUNDLE_BASENAME = "main.bundled"
STYLE_BUNDLE = f"{BUNDLE_BASENAME}.css"
SCRIPT_BUNDLE = f"{BUNDLE_BASENAME}.js"

BABEL_PRESETS = ["es2015"]
# Babel standalone build shipped inside the dukpy package.
BABEL_SCRIPT_GLOB = "babel-*.min.js"

# Raster formats Pillow re-encodes in production, keyed by suffix.
OPTIMIZABLE_FORMATS: dict[str, str] = {
    ".png": "PNG",
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
    ".gif": "GIF",
}
JPEG_QUALITY = 85

Task = Callable[[AppConfig], TaskResult]


# ---------------------------------------------------------------------------
# Task wrapper
# ---------------------------------------------------------------------------


def task(name: str, handles: tuple[type[Exception], ...] = ()) -> Callable[..., Task]:
    """Turn a function returning written paths into a pipeline task.

    Args:
        name: Task name used in reports.
        handles: Exception types reported as a failed result. Anything else
            propagates.
    """

    def decorator(fn: Callable[[AppConfig], Iterable[Path]]) -> Task:
        @functools.wraps(fn)
        def wrapper(config: AppConfig) -> TaskResult:
            start = time.monotonic()
            try:
                outputs = [str(path) for path in fn(config)]
            except handles as exc:
                return TaskResult(
                    name=name,
                    ok=False,
                    detail=f"{type(exc).__name__}: {exc}",
                    duration_seconds=time.monotonic() - start,
                )
            return TaskResult(
                name=name,
                outputs=outputs,
                duration_seconds=time.monotonic() - start,
            )

        wrapper.task_name = name  # type: ignore[attr-defined]
        return wrapper

    return decorator


def _write_text(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Compile tasks
# ---------------------------------------------------------------------------


@task("compile-markup", handles=(UnicodeDecodeError, OSError))
def compile_markup(config: AppConfig) -> list[Path]:
    written: list[Path] = []
    out_root = config.path(config.output.root)
    for source in sorted(config.project_root.glob(config.source.html)):
        html = source.read_text(encoding="utf-8")
        if config.is_production:
            html = minify_html.minify(html, minify_css=True, minify_js=True, keep_comments=False)
        written.append(_write_text(out_root / source.name, html))
    return written


@task("compile-styles", handles=(sass.CompileError, UnicodeDecodeError, OSError))
def compile_styles(config: AppConfig) -> list[Path]:
    """Compile ``app/scss/index.scss`` into ``css/main.bundled.css``."""
    source = config.path(config.source.scss)
    if not source.is_file():
        raise FileNotFoundError(f"Stylesheet entry point not found: {source}")
    css_dir = ensure_dir(config.path(config.output.css))
    target = css_dir / STYLE_BUNDLE

    if config.is_production:
        css = sass.compile(filename=str(source), output_style="compressed")
        css = rcssmin.cssmin(add_vendor_prefixes(css, config.browsers))
        return [_write_text(target, css)]

    map_target = css_dir / f"{STYLE_BUNDLE}.map"
    css, source_map = sass.compile(
        filename=str(source),
        output_style="expanded",
        source_map_filename=str(map_target),
        output_filename_hint=str(target),
        source_map_contents=True,
    )
    return [_write_text(target, css), _write_text(map_target, source_map)]


@task("compile-scripts", handles=(BundleError, dukpy.JSRuntimeError, UnicodeDecodeError, OSError))
def compile_scripts(config: AppConfig) -> list[Path]:
    """Bundle ``app/js/index.js`` into ``js/main.bundled.js``."""
    code = bundle(config.path(config.source.js))
    if config.is_production:
        code = transpile(code)
        code = rjsmin.jsmin(code)
    return [_write_text(config.path(config.output.js) / SCRIPT_BUNDLE, code)]


@task("compile-media", handles=(OSError,))
def compile_media(config: AppConfig) -> list[Path]:
    """Copy media files newer than their output copy; optimize them in production."""
    media_root = config.path(config.source.media_root)
    if not media_root.is_dir():
        return []

    out_root = config.path(config.output.media)
    written: list[Path] = []
    for source in sorted(media_root.glob(config.source.media)):
        if not source.is_file():
            continue
        target = out_root / source.relative_to(media_root)
        if not is_newer(source, target):
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, target)
        if config.is_production:
            optimize_image(target)
        written.append(target)
    return written


@task("compile-misc", handles=(OSError,))
def compile_misc(config: AppConfig) -> list[Path]:
    out_root = config.path(config.output.root)
    written: list[Path] = []
    for pattern in config.source.misc:
        for source in sorted(config.project_root.glob(pattern)):
            if source.is_file():
                out_root.mkdir(parents=True, exist_ok=True)
                written.append(Path(shutil.copy2(source, out_root / source.name)))
    return written


@task("clean")
def clean(config: AppConfig) -> list[Path]:
    """Delete the output tree of the active environment."""
    root = config.path(config.output.root)
    if not root.exists():
        return []
    shutil.rmtree(root)
    return [root]


COMPILE_TASKS: tuple[Task, ...] = (
    compile_markup,
    compile_styles,
    compile_scripts,
    compile_media,
    compile_misc,
)


# ---------------------------------------------------------------------------
# Script transpiling
# ---------------------------------------------------------------------------


@functools.lru_cache(maxsize=1)
def _babel_source() -> str:
    modules = Path(dukpy.__file__).resolve().parent / "jsmodules"
    candidates = sorted(modules.glob(BABEL_SCRIPT_GLOB))
    if not candidates:
        raise FileNotFoundError(f"No Babel build found in {modules}")
    return candidates[-1].read_text(encoding="utf-8")


def transpile(code: str, presets: list[str] | None = None) -> str:
    """Transpile *code* to ES5 with the Babel build dukpy ships.

    Args:
        code: Script source, usually the output of :func:`bundle`.
        presets: Babel presets; defaults to :data:`BABEL_PRESETS`.

    Raises:
        dukpy.JSRuntimeError: If Babel rejects the source.
    """
    result = dukpy.evaljs(
        (
            _babel_source(),
            "var bres, res;"
            "bres = Babel.transform(dukpy.es6code, dukpy.babel_options);",
            "res = {map: bres.map, code: bres.code};",
        ),
        es6code=code,
        babel_options={"presets": presets or BABEL_PRESETS},
    )
    return result["code"]


# ---------------------------------------------------------------------------
# Image optimization
# ---------------------------------------------------------------------------


def optimize_image(path: Path) -> bool:
    """Re-encode a raster image in place when that makes it smaller.

    SVG, WebP, BMP and animated GIFs are left untouched.

    Returns:
        ``True`` if the file was replaced.
    """
    image_format = OPTIMIZABLE_FORMATS.get(path.suffix.lower())
    if image_format is None:
        return False

    buffer = io.BytesIO()
    with Image.open(path) as image:
        if getattr(image, "is_animated", False):
            return False
        options: dict[str, object] = {"optimize": True}
        if image_format == "JPEG":
            options.update(quality=JPEG_QUALITY, progressive=True)
        image.save(buffer, image_format, **options)

    optimized = buffer.getvalue()
    if len(optimized) >= path.stat().st_size:
        return False
    path.write_bytes(optimized)
    return True
