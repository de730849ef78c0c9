from html import escape
from typing import TYPE_CHECKING

from ..models.schemas import RenderedRow, ResultRecord

if TYPE_CHECKING:
    from .autocomplete_controller import AutocompleteController

ROW_TEMPLATE = '<li><a href="{permalink}">{label}</a></li>'


class RowPresenter:
    """One result record shown as a selectable dropdown row."""

    def __init__(self, record: ResultRecord, parent: "AutocompleteController"):
        self.record = record
        self.parent = parent

    def render(self) -> RenderedRow:
        label = self.record.label()
        permalink = self.record.permalink()
        return RenderedRow(
            label=label,
            permalink=permalink,
            html=ROW_TEMPLATE.format(permalink=escape(permalink), label=escape(label)),
        )

    def select(self) -> None:
        # The owning controller collapses the list as part of selecting
        self.parent.select(self.record)
