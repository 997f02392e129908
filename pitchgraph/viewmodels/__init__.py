"""ViewModel package for screen state and command surfaces.

Call context:
    Flows in ``pitchgraph/app/flows.py`` construct these view models and
    attach them to the screens they push or present.

Dependencies:
    View models talk to adapters only through the ports declared in
    ``pitchgraph.domain.ports``; errors reach them as ``UseCaseError``.
"""
