"""Stateless helpers: Bezier math, view transforms, logging and settings files"""
