"""Copying leaf controls between containers.

Qt has no generic clone, so a copy is a fresh widget of the same class with
the user-visible state carried over explicitly. Each supported widget family
has a state copier; plain containers (QWidget, QFrame, QGroupBox) are copied
together with their child widgets.

Widgets that build internal child widgets of their own (item views, tab
widgets, scroll areas and the like) are refused rather than copied hollow.
"""

import logging
from typing import Callable, List, Tuple, Type

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QAbstractButton,
    QAbstractSlider,
    QAbstractSpinBox,
    QCheckBox,
    QComboBox,
    QDateTimeEdit,
    QDoubleSpinBox,
    QFrame,
    QGroupBox,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QProgressBar,
    QSlider,
    QSpinBox,
    QTextEdit,
    QWidget,
)

logger = logging.getLogger(__name__)

# Copied together with their children
CONTAINER_TYPES = (QWidget, QFrame, QGroupBox)

# Own internal child widgets that their constructor recreates
SELF_BUILDING_TYPES = (QComboBox, QAbstractSpinBox, QLineEdit, QTextEdit, QPlainTextEdit)


def _copy_frame(source: QFrame, copy: QFrame) -> None:
    copy.setFrameShape(source.frameShape())
    copy.setFrameShadow(source.frameShadow())
    copy.setLineWidth(source.lineWidth())


def _copy_label(source: QLabel, copy: QLabel) -> None:
    copy.setTextFormat(source.textFormat())
    copy.setAlignment(source.alignment())
    copy.setWordWrap(source.wordWrap())
    pixmap = source.pixmap()
    if pixmap is not None and not pixmap.isNull():
        copy.setPixmap(pixmap)
    else:
        copy.setText(source.text())


def _copy_button(source: QAbstractButton, copy: QAbstractButton) -> None:
    copy.setText(source.text())
    copy.setIcon(source.icon())
    copy.setIconSize(source.iconSize())
    copy.setCheckable(source.isCheckable())
    if isinstance(source, QCheckBox) and source.isTristate():
        copy.setTristate(True)
        copy.setCheckState(source.checkState())
    elif source.isCheckable():
        copy.setChecked(source.isChecked())


def _copy_line_edit(source: QLineEdit, copy: QLineEdit) -> None:
    copy.setMaxLength(source.maxLength())
    copy.setEchoMode(source.echoMode())
    copy.setAlignment(source.alignment())
    copy.setPlaceholderText(source.placeholderText())
    copy.setReadOnly(source.isReadOnly())
    copy.setClearButtonEnabled(source.isClearButtonEnabled())
    copy.setText(source.text())


def _copy_combo(source: QComboBox, copy: QComboBox) -> None:
    copy.setEditable(source.isEditable())
    for i in range(source.count()):
        copy.addItem(source.itemIcon(i), source.itemText(i), source.itemData(i))
    copy.setCurrentIndex(source.currentIndex())
    if source.isEditable():
        copy.setEditText(source.currentText())


def _copy_spin_box(source: QAbstractSpinBox, copy: QAbstractSpinBox) -> None:
    copy.setReadOnly(source.isReadOnly())
    copy.setWrapping(source.wrapping())
    copy.setAlignment(source.alignment())
    copy.setButtonSymbols(source.buttonSymbols())
    copy.setSpecialValueText(source.specialValueText())

    if isinstance(source, QDoubleSpinBox):
        # Decimals first: they round the range and the value
        copy.setDecimals(source.decimals())
    if isinstance(source, (QSpinBox, QDoubleSpinBox)):
        copy.setRange(source.minimum(), source.maximum())
        copy.setSingleStep(source.singleStep())
        copy.setPrefix(source.prefix())
        copy.setSuffix(source.suffix())
        copy.setValue(source.value())
    elif isinstance(source, QDateTimeEdit):
        copy.setDisplayFormat(source.displayFormat())
        copy.setDateTimeRange(source.minimumDateTime(), source.maximumDateTime())
        copy.setCalendarPopup(source.calendarPopup())
        copy.setDateTime(source.dateTime())


def _copy_slider(source: QAbstractSlider, copy: QAbstractSlider) -> None:
    copy.setOrientation(source.orientation())
    copy.setRange(source.minimum(), source.maximum())
    copy.setSingleStep(source.singleStep())
    copy.setPageStep(source.pageStep())
    copy.setInvertedAppearance(source.invertedAppearance())
    if isinstance(source, QSlider):
        copy.setTickPosition(source.tickPosition())
        copy.setTickInterval(source.tickInterval())
    copy.setValue(source.value())


def _copy_progress_bar(source: QProgressBar, copy: QProgressBar) -> None:
    copy.setOrientation(source.orientation())
    copy.setRange(source.minimum(), source.maximum())
    copy.setFormat(source.format())
    copy.setTextVisible(source.isTextVisible())
    copy.setValue(source.value())


def _copy_group_box(source: QGroupBox, copy: QGroupBox) -> None:
    copy.setTitle(source.title())
    copy.setAlignment(source.alignment())
    copy.setFlat(source.isFlat())
    copy.setCheckable(source.isCheckable())
    if source.isCheckable():
        copy.setChecked(source.isChecked())


def _copy_text_edit(source: QTextEdit, copy: QTextEdit) -> None:
    copy.setReadOnly(source.isReadOnly())
    copy.setPlaceholderText(source.placeholderText())
    if source.acceptRichText():
        copy.setHtml(source.toHtml())
    else:
        copy.setAcceptRichText(False)
        copy.setPlainText(source.toPlainText())


def _copy_plain_text_edit(source: QPlainTextEdit, copy: QPlainTextEdit) -> None:
    copy.setReadOnly(source.isReadOnly())
    copy.setPlaceholderText(source.placeholderText())
    copy.setPlainText(source.toPlainText())


# Every matching entry is applied, in order
STATE_COPIERS: List[Tuple[Type[QWidget], Callable[[QWidget, QWidget], None]]] = [
    (QFrame, _copy_frame),
    (QLabel, _copy_label),
    (QAbstractButton, _copy_button),
    (QLineEdit, _copy_line_edit),
    (QComboBox, _copy_combo),
    (QAbstractSpinBox, _copy_spin_box),
    (QAbstractSlider, _copy_slider),
    (QProgressBar, _copy_progress_bar),
    (QGroupBox, _copy_group_box),
    (QTextEdit, _copy_text_edit),
    (QPlainTextEdit, _copy_plain_text_edit),
]


def child_widgets(widget: QWidget) -> List[QWidget]:
    return [child for child in widget.children() if isinstance(child, QWidget)]


def check_copyable(widget: QWidget) -> None:
    """
    Raise if ``widget`` cannot be copied faithfully.

    Raises:
        TypeError: If the widget has child widgets that are neither its own
            content (plain containers) nor rebuilt by its constructor
    """
    if type(widget) in CONTAINER_TYPES:
        for child in child_widgets(widget):
            check_copyable(child)
    elif not isinstance(widget, SELF_BUILDING_TYPES) and child_widgets(widget):
        raise TypeError(
            f"{type(widget).__name__} {widget.objectName()!r} has internal child widgets "
            f"that cannot be copied"
        )


def clone_widget(widget: QWidget, parent: QWidget) -> QWidget:
    """
    Create a copy of ``widget`` inside ``parent``.

    Carries over class, object name, geometry, the per-type state of labels,
    buttons, text inputs, combo boxes, spin boxes, sliders, progress bars and
    group boxes, tooltip, enabled and hidden state, an explicitly set font,
    the style sheet and every dynamic property. Child widgets of plain
    containers are cloned recursively.

    Raises:
        TypeError: If the widget cannot be copied faithfully or its class
            cannot be constructed from a parent
    """
    check_copyable(widget)
    return _clone(widget, parent)


def _clone(widget: QWidget, parent: QWidget) -> QWidget:
    copy = type(widget)(parent)
    copy.setObjectName(widget.objectName())

    for widget_type, copier in STATE_COPIERS:
        if isinstance(widget, widget_type):
            copier(widget, copy)

    copy.setMinimumSize(widget.minimumSize())
    copy.setMaximumSize(widget.maximumSize())
    copy.setGeometry(widget.geometry())
    copy.setToolTip(widget.toolTip())
    copy.setStatusTip(widget.statusTip())
    copy.setEnabled(widget.isEnabled())
    if widget.testAttribute(Qt.WidgetAttribute.WA_SetFont):
        copy.setFont(widget.font())

    for raw_name in widget.dynamicPropertyNames():
        name = bytes(raw_name).decode()
        copy.setProperty(name, widget.property(name))
    copy.setStyleSheet(widget.styleSheet())

    if type(widget) in CONTAINER_TYPES:
        for child in child_widgets(widget):
            _clone(child, copy)

    explicitly_hidden = (
        widget.testAttribute(Qt.WidgetAttribute.WA_WState_ExplicitShowHide) and widget.isHidden()
    )
    copy.setVisible(not explicitly_hidden)
    logger.debug(f"Cloned {type(widget).__name__} {widget.objectName()!r} into {parent.objectName()!r}")
    return copy
