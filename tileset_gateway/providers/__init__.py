"""File provider adapters.

- base: ``FileProvider`` / ``RemoteFileProvider`` contracts and errors
- local: mounted-volume provider (``nfs``)
- blob: Azure Blob Storage provider (``blob``)
- factory: name → remote provider registry
"""
