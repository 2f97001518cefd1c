# modules/users/forms.py

from flask_wtf import FlaskForm
from wtforms import SelectMultipleField, StringField, SubmitField
from wtforms.validators import DataRequired, Length, Optional
from wtforms.widgets import CheckboxInput, ListWidget

from modules.users.models import Permission

PERMISSION_LABELS = {
    Permission.DASHBOARD: 'Dashboard',
    Permission.INBOUND: 'Inbound',
    Permission.OUTBOUND: 'Outbound',
    Permission.INVENTORY: 'Inventory',
    Permission.ADMIN: 'Admin panel',
}


class MultiCheckboxField(SelectMultipleField):
    widget = ListWidget(prefix_label=False)
    option_widget = CheckboxInput()


class UserForm(FlaskForm):
    full_name = StringField('Full name', validators=[DataRequired(), Length(max=255)])
    username = StringField('Login', validators=[DataRequired(), Length(max=64)])
    # plain text on purpose: the admin hands it over to the employee
    password = StringField('Password', validators=[Optional(), Length(max=128)])
    permissions = MultiCheckboxField(
        'Permissions',
        choices=[(p.value, PERMISSION_LABELS[p]) for p in Permission],
        default=[Permission.DASHBOARD.value],
    )
    submit = SubmitField('Save')
