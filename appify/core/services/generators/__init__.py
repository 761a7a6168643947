"""
Generators — produce platform descriptors from one app configuration.

Each formatter module exposes a ``generate_*()`` function taking the
configuration and the shared ``ProjectedFields`` and returning
``GeneratedFile`` instances. Orchestration lives in
``appify.core.services.descriptor_ops``.
"""
