from tersify.main import entrypoint

entrypoint()
