"""Cognitive stores, cycle logic and the tick controller.

Import submodules directly (``synthmind.cognitive.engine``); the package
itself re-exports nothing, so leaf stores can be imported without pulling
in the engine.
"""
