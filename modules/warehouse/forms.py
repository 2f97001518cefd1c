# modules/warehouse/forms.py

from flask_wtf import FlaskForm
from wtforms import HiddenField, IntegerField, SelectField, StringField, SubmitField
from wtforms.validators import DataRequired, Length, NumberRange, Optional, Regexp

from modules.inventory.models import UnitType

NEW_CATEGORY = "__new__"

# Code128 covers printable ASCII only
BARCODE_VALIDATORS = [
    DataRequired(),
    Length(max=64),
    Regexp(r'^[\x20-\x7E]+$', message="Barcode may contain printable ASCII characters only."),
]


def unit_choices():
    return [(u.value, u.label.upper()) for u in UnitType]


class ScanForm(FlaskForm):
    class Meta:
        csrf = False  # submitted via GET

    barcode = StringField('Scanner (barcode)', validators=BARCODE_VALIDATORS)
    submit = SubmitField('Find')


class IntakeForm(FlaskForm):
    barcode = HiddenField(validators=BARCODE_VALIDATORS)
    name = StringField('Product name', validators=[Optional(), Length(max=255)])
    category = SelectField('Category', choices=[], validate_choice=False)
    new_category = StringField('New category', validators=[Optional(), Length(max=100)])
    unit = SelectField('Unit', choices=unit_choices(), default=UnitType.PIECE.value)
    quantity = IntegerField('Inbound quantity', validators=[
        DataRequired(message="Enter a quantity."),
        NumberRange(min=1, message="Quantity must be at least 1."),
    ])
    submit = SubmitField('Save and receive')

    def set_categories(self, categories):
        self.category.choices = (
            [("", "Choose...")]
            + [(c, c) for c in categories]
            + [(NEW_CATEGORY, "+ Add new")]
        )

    def final_category(self) -> str:
        new = (self.new_category.data or "").strip()
        if new:
            return new
        if self.category.data == NEW_CATEGORY:
            return ""
        return (self.category.data or "").strip()


class OutboundForm(FlaskForm):
    amount = IntegerField('Outbound quantity', default=1, validators=[
        DataRequired(message="Invalid amount!"),
        NumberRange(min=1, message="Invalid amount!"),
    ])
    submit = SubmitField('Dispatch')
