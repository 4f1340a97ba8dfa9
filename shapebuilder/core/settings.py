# File: shapebuilder/core/settings.py
# Project: ShapeBuilder (SHB)
# Version: 0.1.0
# Status: stable
# Date: 2026-10-18
# Purpose: Configuración del editor: shb_settings.json (repo-local) + variables de entorno SHB_*.
# Notes: No depende de Qt. El JSON se vuelca a env vars; EditorConfig se arma desde env.
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping

from shapebuilder.core.version import (
    DEFAULT_ANCHOR_HIT_RADIUS_PX,
    DEFAULT_CLOSE_RADIUS_PX,
    DEFAULT_EXPORT_DECIMALS,
    DEFAULT_FLATNESS_TOLERANCE,
    DEFAULT_HANDLE_HIT_RADIUS_PX,
    DEFAULT_MAX_SUBDIVISION_DEPTH,
    DEFAULT_MAXIMIZE_TARGET,
    DEFAULT_UNIFORM_STEPS,
)

log = logging.getLogger(__name__)


# ------------------------------
# Project settings (repo-local)
# ------------------------------
# Defaults reproducibles por proyecto sin tocar el código.
# Archivo esperado: shb_settings.json en el CWD o en algún padre.
PROJECT_SETTINGS_FILENAME = "shb_settings.json"

FLATTEN_MODES = ("adaptive", "uniform")

# clave JSON -> (env var, tipo, min, max)
_NUMERIC_KEYS: dict[str, tuple[str, type, float, float]] = {
    "editor.close_radius_px": ("SHB_CLOSE_RADIUS", float, 0.5, 100.0),
    "editor.anchor_hit_radius_px": ("SHB_ANCHOR_HIT_RADIUS", float, 0.5, 100.0),
    "editor.handle_hit_radius_px": ("SHB_HANDLE_HIT_RADIUS", float, 0.5, 100.0),
    "flatten.tolerance": ("SHB_FLATNESS_TOLERANCE", float, 0.001, 50.0),
    "flatten.max_depth": ("SHB_MAX_DEPTH", int, 1, 32),
    "flatten.uniform_steps": ("SHB_UNIFORM_STEPS", int, 1, 1024),
    "transform.maximize_target": ("SHB_MAXIMIZE_TARGET", float, 1.0, 100000.0),
    "export.decimals": ("SHB_EXPORT_DECIMALS", int, 0, 10),
}


def find_project_settings_path(start: Path | None = None) -> Path | None:
    """Busca shb_settings.json subiendo desde start (o CWD)."""
    start = (start or Path.cwd()).resolve()
    for p in (start, *start.parents):
        candidate = p / PROJECT_SETTINGS_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_project_settings(start: Path | None = None, *, logger: logging.Logger | None = None) -> Dict[str, Any]:
    """Carga el JSON de project settings. Devuelve {} si no existe o es inválido."""
    _log = logger or log
    p = find_project_settings_path(start)
    if not p:
        return {}
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        _log.warning("No se pudo leer %s: %s", p, e)
        return {}
    if not isinstance(data, dict):
        _log.warning("%s ignorado: la raíz no es un objeto JSON", p)
        return {}
    return data


def _deep_get(d: Dict[str, Any], path: str, default: Any = None) -> Any:
    cur: Any = d
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur


def apply_project_settings(
    start: Path | None = None,
    *,
    logger: logging.Logger | None = None,
    prefer_env: bool = True,
) -> Dict[str, Any]:
    """Carga shb_settings.json (si existe) y lo vuelca a variables de entorno SHB_*.

    - Si `prefer_env=True`, una env var ya seteada NO se pisa (ganan los overrides manuales).
    - Si `prefer_env=False`, el JSON pisa la env var.

    Valores fuera de rango o de tipo incorrecto se ignoran (warning).
    Devuelve un dict con los valores *aplicados desde JSON*.
    """
    _log = logger or log
    data = load_project_settings(start, logger=_log)
    if not data:
        return {}

    applied: Dict[str, Any] = {}

    def _set_env(key: str, value: Any) -> None:
        if prefer_env and os.environ.get(key):
            return
        os.environ[key] = str(value)

    for key, (env, kind, lo, hi) in _NUMERIC_KEYS.items():
        v = _deep_get(data, key)
        if v is None:
            continue
        # bool es int en Python: no lo aceptamos como número.
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            _log.warning("Setting %s ignorado (no numérico): %r", key, v)
            continue
        if kind is int and float(v) != int(v):
            _log.warning("Setting %s ignorado (se espera entero): %r", key, v)
            continue
        if not (lo <= v <= hi):
            _log.warning("Setting %s fuera de rango [%s, %s]: %r", key, lo, hi, v)
            continue
        applied[key] = kind(v)
        _set_env(env, kind(v))

    mode = _deep_get(data, "flatten.mode")
    if isinstance(mode, str):
        mode = mode.strip().lower()
        if mode in FLATTEN_MODES:
            applied["flatten.mode"] = mode
            _set_env("SHB_FLATTEN_MODE", mode)
        else:
            _log.warning("Setting flatten.mode inválido: %r", mode)

    if applied:
        _log.info("Project settings aplicados: %s", applied)
    return applied


# ------------------------------
# Env helpers (tolerantes)
# ------------------------------

def _env_float(env: Mapping[str, str], name: str, default: float, *, min_value: float, max_value: float) -> float:
    raw = env.get(name)
    if raw is None or str(raw).strip() == "":
        return float(default)
    try:
        v = float(str(raw).strip())
    except ValueError:
        log.warning("%s inválido (float): %r", name, raw)
        return float(default)
    if v < min_value:
        return float(min_value)
    if v > max_value:
        return float(max_value)
    return v


def _env_int(env: Mapping[str, str], name: str, default: int, *, min_value: int, max_value: int) -> int:
    raw = env.get(name)
    if raw is None or str(raw).strip() == "":
        return int(default)
    try:
        v = int(str(raw).strip())
    except ValueError:
        log.warning("%s inválido (int): %r", name, raw)
        return int(default)
    return max(min_value, min(max_value, v))


def _coerce_flatten_mode(v: Any) -> str:
    s = str(v or "").strip().lower()
    return s if s in FLATTEN_MODES else "adaptive"


@dataclass(frozen=True)
class EditorConfig:
    """Parámetros del editor (radios en px de lienzo)."""

    close_radius_px: float = DEFAULT_CLOSE_RADIUS_PX
    anchor_hit_radius_px: float = DEFAULT_ANCHOR_HIT_RADIUS_PX
    handle_hit_radius_px: float = DEFAULT_HANDLE_HIT_RADIUS_PX

    # adaptive = subdivisión con tolerancia (canónico); uniform = muestreo fijo (menos fiel)
    flatten_mode: str = "adaptive"
    flatness_tolerance: float = DEFAULT_FLATNESS_TOLERANCE
    max_depth: int = DEFAULT_MAX_SUBDIVISION_DEPTH
    uniform_steps: int = DEFAULT_UNIFORM_STEPS

    maximize_target: float = DEFAULT_MAXIMIZE_TARGET
    export_decimals: int = DEFAULT_EXPORT_DECIMALS

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "EditorConfig":
        env = os.environ if environ is None else environ
        return cls(
            close_radius_px=_env_float(env, "SHB_CLOSE_RADIUS", DEFAULT_CLOSE_RADIUS_PX, min_value=0.5, max_value=100.0),
            anchor_hit_radius_px=_env_float(env, "SHB_ANCHOR_HIT_RADIUS", DEFAULT_ANCHOR_HIT_RADIUS_PX, min_value=0.5, max_value=100.0),
            handle_hit_radius_px=_env_float(env, "SHB_HANDLE_HIT_RADIUS", DEFAULT_HANDLE_HIT_RADIUS_PX, min_value=0.5, max_value=100.0),
            flatten_mode=_coerce_flatten_mode(env.get("SHB_FLATTEN_MODE", "adaptive")),
            flatness_tolerance=_env_float(env, "SHB_FLATNESS_TOLERANCE", DEFAULT_FLATNESS_TOLERANCE, min_value=0.001, max_value=50.0),
            max_depth=_env_int(env, "SHB_MAX_DEPTH", DEFAULT_MAX_SUBDIVISION_DEPTH, min_value=1, max_value=32),
            uniform_steps=_env_int(env, "SHB_UNIFORM_STEPS", DEFAULT_UNIFORM_STEPS, min_value=1, max_value=1024),
            maximize_target=_env_float(env, "SHB_MAXIMIZE_TARGET", DEFAULT_MAXIMIZE_TARGET, min_value=1.0, max_value=100000.0),
            export_decimals=_env_int(env, "SHB_EXPORT_DECIMALS", DEFAULT_EXPORT_DECIMALS, min_value=0, max_value=10),
        )


def load_editor_config(start: Path | None = None, *, logger: logging.Logger | None = None) -> EditorConfig:
    """shb_settings.json -> env -> EditorConfig (env gana)."""
    apply_project_settings(start, logger=logger, prefer_env=True)
    return EditorConfig.from_env()
