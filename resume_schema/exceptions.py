# resume_schema/exceptions.py


class ResumeSchemaError(Exception):
    """Base error for resume_schema"""


class SchemaDefinitionError(ResumeSchemaError):
    """A section schema definition could not be loaded"""


class ContextBuildError(ResumeSchemaError):
    """A registered context builder raised while building context"""

    def __init__(self, builder_id: str, cause: Exception):
        self.builder_id = builder_id
        self.cause = cause
        super().__init__(f"Context builder '{builder_id}' failed: {cause}")
