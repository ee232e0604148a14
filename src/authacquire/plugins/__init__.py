"""Built-in acquirer strategies.

Each sub-package holds one :class:`~authacquire.auth.base.Acquirer`
implementation in its ``plugin`` module and re-exports it:

* :mod:`~authacquire.plugins.noop` -- ``none``
* :mod:`~authacquire.plugins.fixed` -- ``fixed``
* :mod:`~authacquire.plugins.basic` -- ``basic``
* :mod:`~authacquire.plugins.remote_bearer` -- ``remote_bearer`` / ``jwt``

All of them are registered by
:func:`~authacquire.auth.manager.create_default_manager`.
"""
