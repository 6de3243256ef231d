"""Base class for objects handled by the identity map and the record mapper."""


from idmap import hierarchy


class Record:
    """A row of a table, identified by id within its type hierarchy. Subclasses are
    registered in idmap.hierarchy when they are defined; a direct subclass of Record
    is the root of a hierarchy.

    Subclasses used with idmap.db.record_mapper should set table_name and columns
    (the persisted attributes other than id and the stored type name).
    """

    table_name = None
    columns = ()

    def __init_subclass__( cls, **kwargs ):
        super().__init_subclass__( **kwargs )

        parents = [ base for base in cls.__bases__
            if issubclass( base, Record ) and base is not Record ]

        if len( parents ) > 1:
            raise ValueError( 'Record type {} has more than one record parent.'.format(
                cls.__name__ ) )

        hierarchy.register( cls, parents[ 0 ] if parents else None )


    def __init__( self, id = None, **attributes ):
        self.id = id

        for column in self.columns:
            setattr( self, column, attributes.pop( column, None ) )

        if attributes:
            raise ValueError( 'Unknown attributes for {}: {}'.format(
                type( self ).__name__, ', '.join( sorted( attributes ) ) ) )


    def attributes( self ):
        return { column: getattr( self, column ) for column in self.columns }


    def __repr__( self ):
        return '<{} id={}>'.format( type( self ).__name__, self.id )
