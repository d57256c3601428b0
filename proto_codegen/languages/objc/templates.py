"""
Jinja2 templates for the Objective-C extension artifacts.
"""

MEMBERS_HEADER_TEMPLATE = """\

{% if add_comments %}
/*! Extension {{ full_name }} of {{ extendee }}, field {{ number }}. */
{% endif %}
{{ export_macro }} {{ extension_type }} *{{ global_name }};
"""

SOURCE_DEFINITION_TEMPLATE = """\

{{ extension_type }} *{{ global_name }};
"""

FIELD_DATA_TEMPLATE = """\

static {{ runtime_prefix }}FieldData {{ data_name }} = {
  .name = "{{ name }}",
  .javaName = "{{ java_name }}",
  .number = {{ number }},
  .flags = {{ flags }},
  .cardinality = {{ cardinality }},
  .type = {{ type_enum }},
  .defaultValue.value{{ default_slot }} = {{ default_literal }},
{% if default_length is not none %}
  .defaultLength = {{ default_length }},
{% endif %}
  .objcType = {{ objc_type }},
  .containingType = "{{ containing_type }}",
  .optionsData = {{ options_data }},
  .optionsDataLength = {{ options_length }},
};
"""

SOURCE_INITIALIZER_TEMPLATE = """\
{{ global_name }} = {{ runtime_prefix }}NewExtension(&{{ data_name }});
"""

REGISTRATION_TEMPLATE = """\
{{ runtime_prefix }}ExtensionRegistryAdd({{ registry_variable }}, [{{ extendee_class }} class], {{ number }}, {{ global_name }});
"""

OBJC_TEMPLATES = {
    "members_header.h.j2": MEMBERS_HEADER_TEMPLATE,
    "source_definition.m.j2": SOURCE_DEFINITION_TEMPLATE,
    "field_data.m.j2": FIELD_DATA_TEMPLATE,
    "source_initializer.m.j2": SOURCE_INITIALIZER_TEMPLATE,
    "registration.m.j2": REGISTRATION_TEMPLATE,
}
