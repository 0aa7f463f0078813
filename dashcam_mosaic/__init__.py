"""
dashcam-mosaic

Groups the segment files a vehicle's multi-camera event recorder writes into
per-event units, joins each camera's segments losslessly and composes a 2x2
mosaic video with a burned-in timestamp.
"""

__version__ = "0.1.0"
