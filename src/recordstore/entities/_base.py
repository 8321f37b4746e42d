from pydantic import BaseModel
from pydantic import Field as PydanticField

from recordstore.core.errors import IllegalStateError


class Entity(BaseModel):
    """Base entity class with a storage-generated integer identifier.

    The identifier is frozen: it can be supplied when rehydrating an entity
    from a stored row, but never assigned afterwards by callers. The store
    binds it once, when the entity is first persisted.
    """

    id: int | None = PydanticField(
        default=None,
        frozen=True,
        description="Unique identifier assigned by the store",
    )

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    def _assign_identity(self, value: int) -> None:
        if self.id is not None:
            raise IllegalStateError(
                f"{type(self).__name__} already has identity {self.id}"
            )
        self.__dict__["id"] = value
        self.__pydantic_fields_set__.add("id")

    def _clear_identity(self) -> None:
        self.__dict__["id"] = None
        self.__pydantic_fields_set__.discard("id")
