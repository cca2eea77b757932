"""
Modules -- stateful application services over the pure engines.

``inventory`` owns the item collection, ``ration`` the fresh-ration and
attendance figures, ``reporting`` the monthly report and its exports,
and ``cli`` wires them to the command line.
"""
