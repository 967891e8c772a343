from humps import camelize  # type: ignore[attr-defined]
from pydantic import BaseModel, ConfigDict


def to_camel(string: str) -> str:
    return camelize(string)


BaseDomainConfig = ConfigDict(
    extra='forbid',
    use_enum_values=True,
    from_attributes=True,
    alias_generator=to_camel,
    populate_by_name=True,
)


class BaseDomain(BaseModel):
    model_config = BaseDomainConfig


class RequestDomain(BaseDomain):
    """
    Inbound payloads. The editor may send fields we don't care about,
    so unknown keys are dropped instead of rejected.
    """

    model_config = ConfigDict(**{**BaseDomainConfig, 'extra': 'ignore'})

    def get_missing_fields(self) -> list[str]:
        """
        Field aliases that were not provided or are empty
        """
        missing = []
        for name, field in type(self).model_fields.items():
            if not getattr(self, name):
                missing.append(field.alias or name)
        return missing
