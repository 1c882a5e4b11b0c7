from typing import Any


class TextValidator:
    """Required-field checks for book titles and authors."""

    @staticmethod
    def is_present(value: Any) -> bool:
        # None, "", 0, False and empty containers count as missing
        return bool(value)

    @staticmethod
    def validate_title(title: Any) -> bool:
        return TextValidator.is_present(title)

    @staticmethod
    def validate_author(author: Any) -> bool:
        return TextValidator.is_present(author)
