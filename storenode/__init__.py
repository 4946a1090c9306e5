"""Store node: content-addressed blob server answering put/get over gRPC."""
