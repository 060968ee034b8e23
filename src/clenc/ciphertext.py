from dataclasses import dataclass
import json

from crypto.common.ec import Curve, Point
from crypto.common.utils import serialize_point, deserialize_point
from clenc.errors import InvalidCiphertextShape

CIPHERTEXT_FIELDS = ("c1", "c2")


@dataclass(frozen=True)
class Ciphertext:
    """
    A CL ciphertext. For plaintext m and randomizer r under public key pk:
    c1 = gq^r and c2 = f^m * pk^r (in additive notation, r*gq and m*f + r*pk).

    There is no integrity protection: any pair of group elements is accepted
    and decrypts to some element, meaningful or not.
    """

    c1: Point
    c2: Point

    def __post_init__(self):
        for name in CIPHERTEXT_FIELDS:
            if not isinstance(getattr(self, name), Point):
                raise InvalidCiphertextShape(
                    f"Ciphertext component {name} is missing or not a group element"
                )

    def to_dict(self) -> dict:
        return {name: serialize_point(getattr(self, name)) for name in CIPHERTEXT_FIELDS}

    @classmethod
    def from_dict(cls, data: dict, curve: Curve) -> "Ciphertext":
        """
        Decodes a ciphertext whose points lie on `curve`.

        Raises:
            InvalidCiphertextShape: If the encoding lacks a component or a
                coordinate, or is not shaped like `to_dict` output.
            ValueError: If a component is not a point of `curve`.
        """
        if not isinstance(data, dict):
            raise InvalidCiphertextShape(
                f"Encoded ciphertext must be an object, got {type(data).__name__}"
            )
        missing = [name for name in CIPHERTEXT_FIELDS if data.get(name) is None]
        if missing:
            raise InvalidCiphertextShape(
                f"Ciphertext is missing component(s): {', '.join(missing)}"
            )

        points = {}
        for name in CIPHERTEXT_FIELDS:
            component = data[name]
            if not isinstance(component, dict):
                raise InvalidCiphertextShape(
                    f"Ciphertext component {name} must be an object, got {type(component).__name__}"
                )
            try:
                points[name] = deserialize_point(component, curve)
            except (KeyError, TypeError) as e:
                raise InvalidCiphertextShape(
                    f"Ciphertext component {name} is malformed: missing or invalid {e}"
                ) from e
        return cls(**points)

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, json_str: str, curve: Curve) -> "Ciphertext":
        return cls.from_dict(json.loads(json_str), curve)


def check_ciphertext(value) -> Ciphertext:
    """Rejects anything that is not a well-formed Ciphertext, e.g. a bare tuple."""
    if not isinstance(value, Ciphertext):
        raise InvalidCiphertextShape(
            f"Expected a Ciphertext with components c1 and c2, got {type(value).__name__}"
        )
    return value
