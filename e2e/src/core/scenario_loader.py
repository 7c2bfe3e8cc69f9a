from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import yaml

from src.core.ids import generate_unique_identifier
from src.core.types import AssertText, AssertTitle, Click, Fill, Navigate, Scenario, Step
from src.selectors import parabank_selectors

DEFAULT_SCENARIO_FILE = Path(__file__).resolve().parents[2] / "scenarios" / "parabank.yaml"

_PLACEHOLDER = re.compile(r"\{([A-Za-z_]\w*)\}")
_SELECTOR_REF = re.compile(r"^\$([A-Z][A-Z0-9_]*)$")


def load_scenarios(
    path: str | Path = DEFAULT_SCENARIO_FILE,
    id_factory: Callable[[Optional[str]], str] = generate_unique_identifier,
    seed: Optional[str] = None,
) -> List[Scenario]:
    """
    id_factory is called once per scenario; with a seed it gets "<seed>:<scenario id>".
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Scenario file not found: {p.resolve()}")

    raw = yaml.safe_load(p.read_text(encoding="utf-8"))
    if not isinstance(raw, dict) or not isinstance(raw.get("scenarios"), list):
        raise ValueError(f"{p.name} must be a mapping with a 'scenarios' list")

    fragments = raw.get("fragments") or {}
    if not isinstance(fragments, dict):
        raise ValueError("fragments must be a mapping of name -> step list")

    out: List[Scenario] = []
    seen = set()
    for row in raw["scenarios"]:
        if not isinstance(row, dict):
            raise ValueError("Each scenario must be a dict")
        sid = str(row.get("id"))
        if sid in seen:
            raise ValueError(f"Duplicate scenario id: {sid}")
        seen.add(sid)
        uid = id_factory(f"{seed}:{sid}" if seed is not None else None)
        out.append(_to_scenario(row, fragments, uid))
    return out


def _to_scenario(d: Dict[str, Any], fragments: Dict[str, Any], uid: str) -> Scenario:
    for k in ("id", "name", "steps"):
        if k not in d:
            raise ValueError(f"Missing key '{k}' in scenario: {d}")
    if not isinstance(d["steps"], list):
        raise ValueError(f"steps must be a list: {d['id']}")

    raw_vars = d.get("vars") or {}
    if not isinstance(raw_vars, dict):
        raise ValueError(f"vars must be dict: {d['id']}")

    # vars may use {uid} and any var declared above them
    env: Dict[str, str] = {"uid": uid}
    for name, value in raw_vars.items():
        env[str(name)] = _render(str(value), env, d["id"])

    rows = _expand(d["steps"], fragments, d["id"])
    steps = tuple(_to_step(r, env, d["id"]) for r in rows)
    if not steps:
        raise ValueError(f"Scenario has no steps: {d['id']}")

    tags = d.get("tags") or []
    return Scenario(id=str(d["id"]), name=str(d["name"]), steps=steps, tags=tuple(str(t) for t in tags))


def _expand(rows: List[Any], fragments: Dict[str, Any], sid: str) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for r in rows:
        if not isinstance(r, dict) or len(r) != 1:
            raise ValueError(f"Each step must be a single-key mapping ({sid}): {r}")
        if "use" not in r:
            out.append(r)
            continue
        name = r["use"]
        frag = fragments.get(name)
        if not isinstance(frag, list):
            raise ValueError(f"Unknown fragment '{name}' in scenario {sid}")
        for fr in frag:
            if isinstance(fr, dict) and "use" in fr:
                raise ValueError(f"Fragment '{name}' may not use other fragments")
        out.extend(frag)
    return out


def _to_step(r: Dict[str, Any], env: Dict[str, str], sid: str) -> Step:
    (kind, arg), = r.items()

    def text(v: Any) -> str:
        return _render(str(v), env, sid)

    def field(key: str) -> Any:
        if not isinstance(arg, dict) or key not in arg:
            raise ValueError(f"'{kind}' step needs '{key}' ({sid}): {r}")
        return arg[key]

    if kind == "navigate":
        return Navigate(url=_selector(text(arg)))
    if kind == "fill":
        return Fill(locator=_selector(text(field("locator"))), value=text(field("value")))
    if kind == "click":
        return Click(locator=_selector(text(arg)))
    if kind == "assert_text":
        return AssertText(locator=_selector(text(field("locator"))), expected=text(field("expected")))
    if kind == "assert_title":
        return AssertTitle(pattern=text(arg))
    raise ValueError(f"Unknown step '{kind}' in scenario {sid}")


def _render(s: str, env: Dict[str, str], sid: str) -> str:
    def sub(m: re.Match) -> str:
        key = m.group(1)
        if key not in env:
            raise ValueError(f"Unknown placeholder '{{{key}}}' in scenario {sid}")
        return env[key]

    return _PLACEHOLDER.sub(sub, s)


def _selector(s: str) -> str:
    m = _SELECTOR_REF.match(s)
    if not m:
        return s
    value = getattr(parabank_selectors, m.group(1), None)
    if not isinstance(value, str):
        raise ValueError(f"Unknown selector constant: {s}")
    return value
