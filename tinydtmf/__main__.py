from tinydtmf.cli import entrypoint

entrypoint()
