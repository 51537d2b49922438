"""Provides forms for login and signup."""

from wtforms import Form, PasswordField, StringField
from wtforms.validators import DataRequired, InputRequired, Length


class LoginForm(Form):
    """Log in form."""

    email = StringField('Email', validators=[DataRequired(), Length(max=255)])
    password = PasswordField('Password', validators=[InputRequired()])


class SignupForm(Form):
    """Account creation form, posted as ``firstName``, ``lastName``, etc."""

    first_name = StringField('First name', name='firstName',
                             validators=[DataRequired(), Length(max=100)])
    last_name = StringField('Last name', name='lastName',
                            validators=[DataRequired(), Length(max=100)])
    email = StringField('Email', validators=[DataRequired(), Length(max=255)])
    password = PasswordField('Password', validators=[InputRequired()])
    confirm_password = PasswordField('Confirm password',
                                     name='confirmPassword',
                                     validators=[InputRequired()])
