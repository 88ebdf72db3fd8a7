"""
Bezier Curve Editor - Data Models

This module contains the data model classes of the editing engine.
This is the MODEL in MVC architecture.

Public API: Import Curve, CurvePoint, ViewSettings, Vec2, Rect from models
"""

from .transform import Vec2, Rect
from .curve_point import CurvePoint
from .curve import Curve
from .view_settings import ViewSettings

__all__ = ['Vec2', 'Rect', 'CurvePoint', 'Curve', 'ViewSettings']
