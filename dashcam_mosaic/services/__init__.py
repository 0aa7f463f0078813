"""
Service layer.

Collects segments, drives the ffmpeg backend and retires temporary artifacts.
Modules are imported directly (``from dashcam_mosaic.services.x import ...``).
"""
