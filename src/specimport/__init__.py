"""specimport -- Import API descriptors into a canonical gateway API model.

This package accepts a payload claiming to be a Swagger 1.x, Swagger 2.x,
OpenAPI 3.x, or WSDL service description, detects its real format, parses it
into a version-tagged *descriptor*, and converts that descriptor into a
:class:`~specimport.models.SwaggerApiEntity` holding paths, operations and
gateway policy hints contributed by pluggable *policy visitors*.

Typical usage::

    from specimport.models import ImportRequest
    from specimport.service import DescriptorImportService

    service = DescriptorImportService()
    entity = service.create_api(ImportRequest(payload=text, with_policies=["mock"]))

Modules:
    service: Orchestration entry point (parse, transform, create_api).
    descriptors: Version-tagged descriptor wrappers.
    models: Pydantic models shared across the package.
    config: Import configuration loading and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    security: Default URL allowlist / private network guard.
    app: Typer command-line shell around the service.
"""

__version__ = "0.1.0"
