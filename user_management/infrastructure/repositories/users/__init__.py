# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .sqlalchemy_credential_store import SqlAlchemyCredentialStore, credential_store_factory

__all__ = ["SqlAlchemyCredentialStore", "credential_store_factory"]
