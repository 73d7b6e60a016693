import json
import os
from functools import lru_cache
from typing import Dict, Optional

import jsonpatch
from botocore.loaders import Loader, instance_cache
from botocore.model import OperationModel, ServiceModel

ServiceName = str

spec_patches_json = os.path.join(os.path.dirname(__file__), "spec-patches.json")


def load_spec_patches() -> Dict[str, list]:
    if not os.path.exists(spec_patches_json):
        return {}
    with open(spec_patches_json) as fd:
        return json.load(fd)


class PatchingLoader(Loader):
    """
    A custom botocore Loader that applies JSON patches from the given json patch file to the specs as they are loaded.
    The patches pin the parts of the service models the typed API modules were generated from (f.e. the required
    members of a request), independent of the installed botocore version.
    """

    patches: Dict[str, list]

    def __init__(self, patches: Dict[str, list], *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.patches = patches

    @instance_cache
    def load_data(self, name: str):
        result = super(PatchingLoader, self).load_data(name)

        if patches := self.patches.get(name):
            return jsonpatch.apply_patch(result, patches)

        return result


loader = PatchingLoader(load_spec_patches())


@lru_cache()
def load_service(
    service: ServiceName, version: Optional[str] = None, model_type="service-2"
) -> ServiceModel:
    """
    Loads the service model from the data files shipped with botocore, with the patches of this package applied.
    For example: load_service("kinesis", "2013-12-02")
    """
    service_description = loader.load_service_model(service, model_type, version)
    return ServiceModel(service_description, service)


def load_operation(service: ServiceName, operation: str) -> OperationModel:
    return load_service(service).operation_model(operation)
