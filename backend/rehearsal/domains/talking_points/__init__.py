"""Talking-point and presentation-flow generation."""

from rehearsal.domains.talking_points.service import TalkingPointService

__all__ = ["TalkingPointService"]
