"""Form contracts — a Form record built from embedded field/layout objects.

Only ``Form`` is a record.  Fields, sections, layout configuration,
actions, dependencies, repeating groups and restraints are embedded
objects validated as part of the form that holds them.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from recordkit.domain.record import RECORD, SchemaModel, extend, optional, required
from recordkit.domain.registry import contract_key, register_contract
from recordkit.domain.types import UuidStr, at_least, text, url

DOMAIN = "forms"

FieldType = Literal[
    "text",
    "textarea",
    "number",
    "select",
    "checkbox",
    "radio",
    "date",
    "password",
    "relationship",
    "custom",
]
# Restraints cannot allow "relationship" fields.
RestrainedFieldType = Literal[
    "text", "textarea", "number", "select", "checkbox", "radio", "date", "password", "custom"
]
Condition = Literal["equals", "notEquals", "greaterThan", "lessThan"]
LayoutType = Literal["singleColumn", "twoColumn", "grid", "custom"]

FieldName = text("Field name is required.")
RelatedRecordType = text("Related record type is required.")
ComponentName = text("Custom component name is required.")
SubmitAction = text("Submit action is required.")
DependentField = text("Dependent field name is required.")
DependsOnField = text("Depends on field name is required.")
GroupName = text("Group name is required.")
RedirectUrl = url()
Columns = at_least(1)


class FieldValidations(SchemaModel):
    """Input rules for a single form field."""

    min_length: float | None = None
    max_length: float | None = None
    min_value: float | None = None
    max_value: float | None = None
    pattern: str | None = Field(default=None, description="Regular expression for the input.")


class Relationship(SchemaModel):
    """Configuration for a field that references other records."""

    relationship_type: Literal["oneToOne", "oneToMany", "manyToMany"]
    related_record_type: RelatedRecordType
    related_records: list[UuidStr] | None = None
    allow_add_new: bool = False


class CustomComponent(SchemaModel):
    """A custom component rendered in place of a built-in input."""

    component_name: ComponentName
    props: dict[str, Any] | None = None


class FormField(SchemaModel):
    """An individual form field component."""

    field_name: FieldName
    label: str | None = None
    type: FieldType
    placeholder: str | None = None
    options: list[str] | None = None
    default_value: Any = None
    required: bool = False
    validations: FieldValidations | None = None
    error_message: str | None = None
    relationship: Relationship | None = None
    custom_component: CustomComponent | None = None


class Spacing(SchemaModel):
    top: float | None = None
    bottom: float | None = None
    left: float | None = None
    right: float | None = None


class FormLayoutConfig(SchemaModel):
    """Grid placement for a field, section or the whole form."""

    columns: Columns = Field(default=12, description="Columns spanned on a 12-column grid.")
    order: float | None = None
    align: Literal["left", "center", "right"] | None = None
    padding: Spacing | None = None
    margin: Spacing | None = None


class ConditionalLogic(SchemaModel):
    """Shows or hides a section based on another field's value."""

    depends_on_field: str | None = None
    condition: Condition | None = None
    value: Any = None
    hidden: bool = False


class FormSection(SchemaModel):
    """A group of related fields."""

    section_title: str | None = None
    description: str | None = None
    fields: list[FormField]
    layout_config: FormLayoutConfig | None = None
    conditional_logic: ConditionalLogic | None = None


class FormLayout(SchemaModel):
    """How sections are arranged on the form."""

    layout_type: LayoutType
    sections: list[FormSection]
    layout_config: FormLayoutConfig | None = None


class FormActions(SchemaModel):
    """Actions the form triggers."""

    submit_action: SubmitAction
    reset_action: str | None = None
    redirect_on_submit: RedirectUrl | None = None


class FormDependencies(SchemaModel):
    """A field whose behaviour depends on another field's value."""

    dependent_field: DependentField
    depends_on_field: DependsOnField
    condition: Condition
    dependent_field_behavior: Literal["show", "hide", "enable", "disable"]
    dependent_options: list[str] | None = None


class RepeatingFieldGroup(SchemaModel):
    """A group of fields the user can add several times (addresses, contacts)."""

    group_name: GroupName
    fields: list[FormField]
    min_repeats: float | None = None
    max_repeats: float | None = None
    add_button_label: str | None = None
    remove_button_label: str | None = None
    layout_config: FormLayoutConfig | None = None


class FormRestraints(SchemaModel):
    """Limits applied to the form's fields."""

    max_fields: float | None = None
    max_field_length: float | None = None
    allowed_field_types: list[RestrainedFieldType] | None = None
    allowed_options_count: float | None = None


FORM = extend(
    RECORD,
    "Form",
    {
        "form_name": required(text("Form name is required."), "The name of the form."),
        "description": optional(str, "A description of the form."),
        "fields": required(list[FormField], "The fields that make up the form."),
        "layout": required(FormLayout, "How the fields are arranged."),
        "actions": required(FormActions, "Submit and reset actions."),
        "dependencies": optional(list[FormDependencies], "Dependencies between fields."),
        "repeating_groups": optional(
            list[RepeatingFieldGroup], "Groups of fields that can be added repeatedly."
        ),
        "restraints": optional(FormRestraints, "Limits applied to the form's fields."),
    },
    doc="A complete form: fields, layout, actions, dependencies and restraints.",
)

CONTRACTS = (FORM,)

for _contract in CONTRACTS:
    register_contract(contract_key(DOMAIN, _contract), _contract)
