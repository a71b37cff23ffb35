"""ReportView

QTableWidget-based view of the Sales Rep Performance report with a pair of
bounded date pickers. All state lives in ``ReportViewModel``; the view only
renders it and forwards header clicks / date edits.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from PyQt6.QtCore import QDate, Qt
from PyQt6.QtWidgets import (
    QDateEdit,
    QFormLayout,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from salesreport.models import format_cell
from salesreport.services.date_range import RangeEdge
from salesreport.services.row_sort import SortDirection
from salesreport.viewmodels.report_viewmodel import ReportState, ReportStatus, ReportViewModel

__all__ = ["ReportView"]


def _qdate(value: date) -> QDate:
    return QDate(value.year, value.month, value.day)


class ReportView(QWidget):
    def __init__(
        self, viewmodel: ReportViewModel | None = None, parent: Optional[QWidget] = None
    ):
        super().__init__(parent)
        self.viewmodel = viewmodel or ReportViewModel()
        self._build_ui()
        self._remove_listener = self.viewmodel.add_listener(self.render)
        self.render(self.viewmodel.state)

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        self.title_label = QLabel("Sales Rep Performance")
        self.title_label.setObjectName("viewTitleLabel")
        root.addWidget(self.title_label)

        pickers = QHBoxLayout()
        form = QFormLayout()
        self.start_edit = self._make_date_edit("startDate")
        self.end_edit = self._make_date_edit("endDate")
        form.addRow("Start Date", self.start_edit)
        form.addRow("End Date", self.end_edit)
        pickers.addLayout(form)
        pickers.addStretch(1)
        root.addLayout(pickers)
        self.start_edit.dateChanged.connect(
            lambda d: self.viewmodel.on_date_field_change(RangeEdge.START, d.toPyDate())
        )
        self.end_edit.dateChanged.connect(
            lambda d: self.viewmodel.on_date_field_change(RangeEdge.END, d.toPyDate())
        )

        self.loading_label = QLabel("Loading…")
        self.loading_label.setObjectName("reportLoadingLabel")
        root.addWidget(self.loading_label)

        columns = self.viewmodel.columns
        self.table = QTableWidget(0, len(columns))
        self.table.setHorizontalHeaderLabels([c.label for c in columns])
        self.table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        header = self.table.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
        header.setStretchLastSection(True)
        header.setSectionsClickable(True)
        header.setSortIndicatorShown(True)
        header.sectionClicked.connect(self.on_header_clicked)
        root.addWidget(self.table, 1)

    def _make_date_edit(self, name: str) -> QDateEdit:
        edit = QDateEdit()
        edit.setObjectName(name)
        edit.setCalendarPopup(True)
        edit.setDisplayFormat("yyyy-MM-dd")
        return edit

    # Rendering -------------------------------------------------------------
    def render(self, state: ReportState) -> None:
        self._sync_date_edit(
            self.start_edit, state.start_date, state.min_start_date, state.max_start_date
        )
        self._sync_date_edit(
            self.end_edit, state.end_date, state.min_end_date, state.max_end_date
        )
        self.loading_label.setVisible(state.is_loading)
        self.setProperty("status", state.status.value)
        self._populate(state)

    def _sync_date_edit(self, edit: QDateEdit, value: date, low: date, high: date) -> None:
        edit.blockSignals(True)
        try:
            edit.setDateRange(_qdate(low), _qdate(high))
            edit.setDate(_qdate(value))
        finally:
            edit.blockSignals(False)

    def _populate(self, state: ReportState) -> None:
        columns = self.viewmodel.columns
        self.table.setRowCount(len(state.rows))
        for r, row in enumerate(state.rows):
            for c, col in enumerate(columns):
                item = QTableWidgetItem(format_cell(col, row.get(col.field_name)))
                if col.alignment == "right":
                    item.setTextAlignment(
                        Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter
                    )
                self.table.setItem(r, c, item)
        index = next(
            (i for i, c in enumerate(columns) if c.field_name == state.sorted_by), -1
        )
        order = (
            Qt.SortOrder.AscendingOrder
            if state.sort_direction is SortDirection.ASC
            else Qt.SortOrder.DescendingOrder
        )
        header = self.table.horizontalHeader()
        header.blockSignals(True)
        try:
            header.setSortIndicator(index, order)
        finally:
            header.blockSignals(False)

    # UI callbacks ----------------------------------------------------------
    def on_header_clicked(self, logical_index: int) -> None:
        columns = self.viewmodel.columns
        if not 0 <= logical_index < len(columns) or not columns[logical_index].sortable:
            return
        field_name = columns[logical_index].field_name
        direction = SortDirection.ASC
        if field_name == self.viewmodel.sorted_by:
            current = SortDirection(self.viewmodel.sort_direction)
            direction = SortDirection.DESC if current is SortDirection.ASC else SortDirection.ASC
        self.viewmodel.on_sort(field_name, direction)

    def column_texts(self, column: int) -> list[str]:
        out: list[str] = []
        for r in range(self.table.rowCount()):
            item = self.table.item(r, column)
            out.append(item.text() if item else "")
        return out

    def is_error(self) -> bool:
        return self.viewmodel.status is ReportStatus.ERROR

    def closeEvent(self, event):  # type: ignore[override]
        self._remove_listener()
        super().closeEvent(event)
