"""Show (parse + validate) an EQ profile file."""

import json

from eqfinder.constants import ExitCode
from eqfinder.parsers.detect import FIXED_BAND, load_profile


def _payload(loaded):
    profile = loaded.profile
    payload = {"kind": loaded.kind, "errors": list(loaded.errors), "diagnostics": list(profile.diagnostics)}
    if loaded.kind == FIXED_BAND:
        payload["preamp"] = profile.preamp
        payload["bands"] = [
            {"frequency": b.frequency, "gain": b.gain, "enabled": b.enabled} for b in profile.bands
        ]
    else:
        payload["bands"] = [{"frequency": b.frequency, "gain": b.gain} for b in profile.bands]
        payload["metadata"] = dict(profile.metadata)
    return payload


def run(args):
    try:
        loaded = load_profile(args.path, kind=getattr(args, "kind", None))
    except FileNotFoundError as exc:
        print(f"error: {exc}")
        return ExitCode.NOT_FOUND
    except ValueError as exc:
        print(f"error: {args.path}: {exc}")
        return ExitCode.USAGE

    payload = _payload(loaded)
    if getattr(args, "json", False):
        print(json.dumps(payload, indent=2))
    else:
        print(f"{args.path}: {loaded.kind} profile, {len(payload['bands'])} bands")
        if "preamp" in payload:
            print(f"- preamp: {payload['preamp']:.1f} dB")
        for band in payload["bands"]:
            state = "" if band.get("enabled", True) else " (off)"
            print(f"- {band['frequency']:g} Hz: {band['gain']:+.1f} dB{state}")
        for key, value in payload.get("metadata", {}).items():
            print(f"- {key}: {value}")
        for message in payload["diagnostics"]:
            print(f"warning: {message}")
        for error in loaded.errors:
            print(f"invalid: {error}")

    return ExitCode.OK if loaded.ok else ExitCode.INVALID_PROFILE
