"""
Fixed schema constants for Pod manifests.

Patterns are compiled once at import time and shared read-only by every
validation call.
"""

import re

API_VERSION = "v1"
KIND = "Pod"

SUPPORTED_OS = ("linux", "windows")
SUPPORTED_PROTOCOLS = ("TCP", "UDP")

PORT_MIN = 1
PORT_MAX = 65535

# Signed 64-bit bounds; integer strings outside them are not integers at all
INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1

CONTAINER_NAME_RE = re.compile(r"^[a-z0-9]+(?:_[a-z0-9]+)*$")
IMAGE_RE = re.compile(r"^registry\.bigbrother\.io/[^:]+:[^:]+$")
MEMORY_RE = re.compile(r"^[0-9]+(Mi|Gi|Ki)$")
INT_RE = re.compile(r"^[+-]?[0-9]+$")

RESOURCE_CPU = "cpu"
RESOURCE_MEMORY = "memory"
