from textwrap import dedent

MODULE_TEMPLATE = dedent(
    '''
    """Generated injection specialization of {{ base_qualname }}.

    Generated by: {{ generator_source }}
    Accessors: {{ accessor_summary }}
    Autowire: {{ autowire }}
    """

    from smatterdi._internal.accessors import accessor_return_types, narrow_instance
    from smatterdi._internal.constructors import mirror_constructors

    _accessor_types = accessor_return_types({{ super_global }})
    {{ dependency_globals_block }}


    {{ class_block }}
    ''',
).lstrip()

CLASS_TEMPLATE = dedent(
    """
    class {{ class_name }}({{ super_global }}):
        __smatterdi_specializes__ = {{ super_global }}
        __smatterdi_constructors__ = mirror_constructors({{ super_global }})

    {{ methods_block }}
    """,
).strip()

NEW_METHOD_TEMPLATE = dedent(
    """
    def __new__(cls, {{ registry_parameter }}, /, *args, **kwargs):
        return super().__new__(cls, *args, **kwargs)
    """,
).strip()

INIT_METHOD_TEMPLATE = dedent(
    """
    def __init__(self, {{ registry_parameter }}, /, *args, **kwargs):
        self.{{ registry_attribute }} = {{ registry_parameter }}
    {% if autowire %}
        self.{{ autowired_attribute }} = False
    {% endif %}
        super().__init__(*args, **kwargs)
    {% if autowire %}
        self.{{ autowire_method }}()
    {% endif %}
    """,
).strip()

AUTOWIRE_METHOD_TEMPLATE = dedent(
    """
    def {{ autowire_method }}(self):
        if self.{{ autowired_attribute }}:
            return
        self.{{ autowired_attribute }} = True
        self.{{ registry_attribute }}.autowire({{ super_global }}, self)
    """,
).strip()

ACCESSOR_METHOD_TEMPLATE = dedent(
    """
    def {{ accessor_name }}(self):
    {% if autowire %}
        self.{{ autowire_method }}()
    {% endif %}
        return narrow_instance(
            self.{{ registry_attribute }}.get_instance({{ dependency_global }}),
            {{ dependency_global }},
        )
    """,
).strip()

DEPENDENCY_GLOBAL_TEMPLATE = "{{ dependency_global }} = _accessor_types[{{ accessor_name_literal }}]"
