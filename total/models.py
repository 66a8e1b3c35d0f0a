"""Identity and address book models."""

from pydantic import BaseModel, ConfigDict, TypeAdapter, model_validator

DEFAULT_PORT = 4040


class Identity(BaseModel):
    model_config = ConfigDict(strict=True)

    # Zero values stand in for fields missing from a persisted file.
    username: str = ""
    ip: str = ""
    port: int = 0

    @model_validator(mode="before")
    @classmethod
    def fold_key_case(cls, data):
        # "Username" and "username" name the same field; the later key wins
        if isinstance(data, dict):
            return {k.lower() if isinstance(k, str) else k: v for k, v in data.items()}
        return data

    @property
    def address(self) -> str:
        return f"{self.username}@{self.ip}:{self.port}"


# username -> "ip:port", kept verbatim
AddressBook = dict[str, str]

address_book_adapter = TypeAdapter(AddressBook, config=ConfigDict(strict=True))
