# Copyright (c) 2025 Juliete Rossie @ CRIL - CNRS
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

from dataclasses import dataclass
from typing import Optional

from structure.relations import EndpointType, RelationKind


@dataclass(frozen=True)
class Variant:
    """
    Shape of the relations a framework variant accepts.

    support_endpoint and attack_endpoint give the source type of each relation (targets are always single
    arguments). sentinel names the argument standing for prima facie evidence, if the variant has one, and
    sentinel_forbidden says whether that argument may be attacked, attack or be supported.
    """
    name: str
    support_endpoint: EndpointType
    attack_endpoint: EndpointType
    sentinel: Optional[str] = None
    sentinel_forbidden: bool = False

    def endpoint(self, kind: RelationKind) -> EndpointType:
        if kind == RelationKind.SUPPORT:
            return self.support_endpoint
        return self.attack_endpoint
