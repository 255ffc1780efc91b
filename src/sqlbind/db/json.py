import typing as t

from msgspec import json

__all__ = (
    "dumps",
    "loads",
)


def enc_hook(obj: t.Any) -> t.Any:
    if hasattr(obj, "to_dict"):
        return obj.to_dict()

    raise NotImplementedError(f"Cannot serialize {obj!r}")


def dumps(obj: t.Any) -> str:
    return json.encode(obj, enc_hook=enc_hook).decode()


def loads(obj: str | bytes) -> t.Any:
    return json.decode(obj)
