# modules/inventory/forms.py

from flask_wtf import FlaskForm
from wtforms import SelectField, StringField, SubmitField
from wtforms.validators import DataRequired, Length

from modules.warehouse.forms import BARCODE_VALIDATORS, unit_choices

class ProductForm(FlaskForm):
    name = StringField('Name', validators=[DataRequired(), Length(max=255)])
    category = SelectField('Category', choices=[], validators=[DataRequired()])
    unit = SelectField('Unit', choices=unit_choices())
    barcode = StringField('Barcode', validators=BARCODE_VALIDATORS)
    submit = SubmitField('Save')

    def set_categories(self, categories, current=None):
        values = list(categories)
        # keep the product's own category selectable even if it is the only one using it
        if current and current not in values:
            values.append(current)
        self.category.choices = [(c, c) for c in values]


class ProductFilterForm(FlaskForm):
    class Meta:
        csrf = False

    search = StringField('Search (name, barcode)')
    category = SelectField('Category', choices=[('all', 'All categories')], default='all', validate_choice=False)
    submit = SubmitField('Filter')

    def set_categories(self, categories):
        self.category.choices = [('all', 'All categories')] + [(c, c) for c in categories]
