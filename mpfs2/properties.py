import logging


def get_root_from_chunk(instance):
    return get_instance_from_chunk(instance, condition=lambda x: x.father is None)


def get_instance_from_chunk(instance, condition):
    while not condition(instance):
        instance = instance.father

    return instance


class Dependency:
    '''This makes the relation between fields possible.

    In practice this class allows to write something like

        class Simple(Chunk):
            count = fields.StructField('H')
            items = fields.ArrayField(Item(), n=Dependency('.count'))

    and have the number of elements of "items" strictly connected to the
    field named "count": when unpacking the value is read from it, when
    relayouting it is written back into it.

    The expression is resolved like python modules: a leading '.' means
    the path starts from the father of the field, otherwise it starts from
    the root chunk.
    '''
    def __init__(self, expression):
        self.expression = expression
        self.logger = logging.getLogger(__name__)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression})>'

    def resolve_field(self, instance):
        fields_path = self.expression.split('.')
        # '.count'.split(".") -> ['', 'count']
        if fields_path[0] == '':
            field = instance.father
            fields_path = fields_path[1:]
        else:
            field = get_root_from_chunk(instance)

        if field is None:
            raise AttributeError(f'cannot resolve {self!r} for a field without father')

        for component_name in fields_path:
            field = getattr(field, component_name)

        self.logger.debug('%r resolved as field %s', self, field.__class__.__name__)

        return field

    def resolve(self, instance):
        '''With this method we resolve the attribute with respect to the instance
        passed as argument.'''
        return self.resolve_field(instance).value

    def resolve_and_set(self, instance, value):
        self.resolve_field(instance).value = value
