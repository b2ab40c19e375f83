#!/usr/bin/env python3
"""
PODVALID FIELD VALIDATORS - Recursive Descent
---------------------------------------------
One routine per schema object of a Pod manifest. Every routine follows the
same protocol:

1. Wrong container shape -> one type diagnostic, stop inspecting that node.
2. Absent required field -> 'is required' diagnostic with line 0.
3. Present field -> leaf check or recursion into the nested validator.
4. Siblings are always checked; nothing is fail-fast.
5. Fields outside the schema are ignored.

Author: PodValid Team
Date: 2026-10-16
"""

from typing import List, Set

from podvalid.core import diagnostics as diag
from podvalid.core.diagnostics import DiagnosticCollector
from podvalid.core.models import Diagnostic, Node
from podvalid.core.tree import iter_entries, lookup
from podvalid.validator import leaf
from podvalid.validator.schema import (
    API_VERSION,
    CONTAINER_NAME_RE,
    IMAGE_RE,
    KIND,
    MEMORY_RE,
    PORT_MAX,
    PORT_MIN,
    RESOURCE_CPU,
    RESOURCE_MEMORY,
    SUPPORTED_OS,
    SUPPORTED_PROTOCOLS,
)


def _check_enum(node: Node, field: str, allowed) -> List[Diagnostic]:
    """A string field restricted to a fixed set of values."""
    mismatch = leaf.require_string(node, field)
    if mismatch:
        return [mismatch]
    problem = leaf.match_set(node, field, allowed)
    return [problem] if problem else []


def _check_port_number(node: Node, field: str) -> List[Diagnostic]:
    """Integer-valued string within the TCP/UDP port range."""
    mismatch = leaf.require_int(node, field)
    if mismatch:
        return [mismatch]
    problem = leaf.in_range(node, field, leaf.parse_int(node.value), PORT_MIN, PORT_MAX)
    return [problem] if problem else []


def validate_document(node: Node) -> List[Diagnostic]:
    """Root object: apiVersion, kind, metadata, spec."""
    collector = DiagnosticCollector()

    mismatch = leaf.require_object(node, "root")
    if mismatch:
        collector.add(mismatch)
        return collector.as_list()

    api_version, found = lookup(node, "apiVersion")
    if not found:
        collector.add(diag.required("apiVersion"))
    else:
        collector.extend(_check_enum(api_version, "apiVersion", (API_VERSION,)))

    kind, found = lookup(node, "kind")
    if not found:
        collector.add(diag.required("kind"))
    else:
        collector.extend(_check_enum(kind, "kind", (KIND,)))

    metadata, found = lookup(node, "metadata")
    if not found:
        collector.add(diag.required("metadata"))
    else:
        collector.extend(validate_metadata(metadata))

    spec, found = lookup(node, "spec")
    if not found:
        collector.add(diag.required("spec"))
    else:
        collector.extend(validate_spec(spec))

    return collector.as_list()


def validate_metadata(node: Node) -> List[Diagnostic]:
    collector = DiagnosticCollector()

    mismatch = leaf.require_object(node, "metadata")
    if mismatch:
        collector.add(mismatch)
        return collector.as_list()

    name, found = lookup(node, "name")
    if not found:
        collector.add(diag.required("name"))
    elif not name.is_scalar:
        collector.add(leaf.require_string(name, "name"))
    elif name.value == "":
        collector.add(diag.empty_value("name", name.line))

    namespace, found = lookup(node, "namespace")
    if found:
        collector.add(leaf.require_string(namespace, "namespace"))

    labels, found = lookup(node, "labels")
    if found:
        mismatch = leaf.require_object(labels, "labels")
        if mismatch:
            collector.add(mismatch)
        else:
            for _, value in iter_entries(labels):
                collector.add(leaf.require_string(value, "labels"))

    return collector.as_list()


def validate_spec(node: Node) -> List[Diagnostic]:
    collector = DiagnosticCollector()

    mismatch = leaf.require_object(node, "spec")
    if mismatch:
        collector.add(mismatch)
        return collector.as_list()

    os_node, found = lookup(node, "os")
    if found:
        collector.extend(_check_enum(os_node, "os", SUPPORTED_OS))

    containers, found = lookup(node, "containers")
    if not found:
        collector.add(diag.required("containers"))
    else:
        collector.extend(validate_containers(containers))

    return collector.as_list()


def validate_containers(node: Node) -> List[Diagnostic]:
    """
    Validates every container entry in one left-to-right pass.

    Names must match the naming pattern and be unique among siblings; both
    violations are reported as an invalid format on the offending name. The
    set of names seen so far lives only for the duration of this call.
    """
    collector = DiagnosticCollector()

    mismatch = leaf.require_array(node, "containers")
    if mismatch:
        collector.add(mismatch)
        return collector.as_list()

    seen: Set[str] = set()

    for container in node.items:
        mismatch = leaf.require_object(container, "containers")
        if mismatch:
            collector.add(mismatch)
            continue

        name, found = lookup(container, "name")
        if not found:
            collector.add(diag.required("name"))
        elif not name.is_scalar:
            collector.add(leaf.require_string(name, "name"))
        elif name.value == "":
            collector.add(diag.empty_value("name", name.line))
        else:
            collector.add(leaf.match_pattern(name, "name", CONTAINER_NAME_RE))
            if name.value in seen:
                collector.add(diag.invalid_format("name", name.value, name.line))
            seen.add(name.value)

        image, found = lookup(container, "image")
        if not found:
            collector.add(diag.required("image"))
        elif not image.is_scalar:
            collector.add(leaf.require_string(image, "image"))
        else:
            collector.add(leaf.match_pattern(image, "image", IMAGE_RE))

        ports, found = lookup(container, "ports")
        if found:
            collector.extend(validate_ports(ports))

        readiness, found = lookup(container, "readinessProbe")
        if found:
            collector.extend(validate_probe(readiness))

        liveness, found = lookup(container, "livenessProbe")
        if found:
            collector.extend(validate_probe(liveness))

        resources, found = lookup(container, "resources")
        if not found:
            collector.add(diag.required("resources"))
        else:
            collector.extend(validate_resources(resources))

    return collector.as_list()


def validate_ports(node: Node) -> List[Diagnostic]:
    collector = DiagnosticCollector()

    mismatch = leaf.require_array(node, "ports")
    if mismatch:
        collector.add(mismatch)
        return collector.as_list()

    for port in node.items:
        mismatch = leaf.require_object(port, "ports")
        if mismatch:
            collector.add(mismatch)
            continue

        container_port, found = lookup(port, "containerPort")
        if not found:
            collector.add(diag.required("containerPort"))
        else:
            collector.extend(_check_port_number(container_port, "containerPort"))

        protocol, found = lookup(port, "protocol")
        if found:
            collector.extend(_check_enum(protocol, "protocol", SUPPORTED_PROTOCOLS))

    return collector.as_list()


def validate_probe(node: Node) -> List[Diagnostic]:
    """readinessProbe / livenessProbe: an httpGet block with path and port."""
    collector = DiagnosticCollector()

    mismatch = leaf.require_object(node, "probe")
    if mismatch:
        collector.add(mismatch)
        return collector.as_list()

    http_get, found = lookup(node, "httpGet")
    if not found:
        collector.add(diag.required("httpGet"))
        return collector.as_list()

    mismatch = leaf.require_object(http_get, "httpGet")
    if mismatch:
        collector.add(mismatch)
        return collector.as_list()

    path, found = lookup(http_get, "path")
    if not found:
        collector.add(diag.required("path"))
    elif not path.is_scalar:
        collector.add(leaf.require_string(path, "path"))
    elif not path.value.startswith("/"):
        collector.add(diag.invalid_format("path", path.value, path.line))

    port, found = lookup(http_get, "port")
    if not found:
        collector.add(diag.required("port"))
    else:
        collector.extend(_check_port_number(port, "port"))

    return collector.as_list()


def validate_resources(node: Node) -> List[Diagnostic]:
    collector = DiagnosticCollector()

    mismatch = leaf.require_object(node, "resources")
    if mismatch:
        collector.add(mismatch)
        return collector.as_list()

    limits, found = lookup(node, "limits")
    if found:
        collector.extend(validate_resource_map(limits))

    requests, found = lookup(node, "requests")
    if found:
        collector.extend(validate_resource_map(requests))

    return collector.as_list()


def validate_resource_map(node: Node) -> List[Diagnostic]:
    """
    limits / requests. Only cpu and memory are understood; any other
    resource name (extended resources, ephemeral-storage...) passes as-is.
    """
    collector = DiagnosticCollector()

    mismatch = leaf.require_object(node, "resources")
    if mismatch:
        collector.add(mismatch)
        return collector.as_list()

    for key, value in iter_entries(node):
        if key == RESOURCE_CPU:
            collector.add(leaf.require_int_literal(value, RESOURCE_CPU))
        elif key == RESOURCE_MEMORY:
            mismatch = leaf.require_string(value, RESOURCE_MEMORY)
            if mismatch:
                collector.add(mismatch)
            else:
                collector.add(leaf.match_pattern(value, RESOURCE_MEMORY, MEMORY_RE))

    return collector.as_list()
