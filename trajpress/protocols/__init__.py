"""
Protocols (interfaces) for trajpress components.

This module defines abstract contracts that implementations must follow.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence
from trajpress.models import Point

__all__ = [
    'SimplifierProtocol',
    'EncoderProtocol',
]


class SimplifierProtocol(ABC):
    """Protocol for trajectory point reduction."""

    @abstractmethod
    def simplify(self, points: Sequence[Point]) -> List[Point]:
        """
        Reduce a trajectory to the points needed to keep its shape.

        Args:
            points: Trajectory sorted by timestamp

        Returns:
            New list holding a subset of the input points, in input order
        """
        pass


class EncoderProtocol(ABC):
    """Protocol for encoding/decoding point sequences."""

    @abstractmethod
    def encode(self, points: Sequence[Point]) -> bytes:
        """
        Encode a point sequence into bytes.

        Args:
            points: Points to encode

        Returns:
            Encoded byte data
        """
        pass

    @abstractmethod
    def decode(self, data: bytes) -> List[Point]:
        """
        Decode bytes back to the original points.

        Args:
            data: Encoded byte data

        Returns:
            Original points
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Return encoder name for reporting."""
        pass
