"""
Binary install — discover or obtain the monox binary for this host.

Layers (each only imports from the ones above it):

    data/        L0  static platform tables and templates
    detection/   L3  read-only probes (host platform, package manager, manifest)
    resolver/    L2  locate the binary inside node_modules
    execution/   L4  side effects (registry install, release download)
"""
