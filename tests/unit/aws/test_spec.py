import json

from kinesis_client.aws.spec import PatchingLoader, load_service, load_spec_patches


def test_patches_are_loaded():
    patches = load_spec_patches()
    assert "kinesis/2013-12-02/service-2" in patches


def test_kinesis_required_members_are_pinned():
    service = load_service("kinesis")

    assert service.shape_for("PutRecordInput").required_members == ["Data", "PartitionKey"]
    assert service.shape_for("PutRecordsRequestEntry").required_members == [
        "Data",
        "PartitionKey",
    ]
    assert service.shape_for("PutRecordsInput").required_members == ["Records"]
    assert service.shape_for("RegisterStreamConsumerInput").required_members == [
        "StreamARN",
        "ConsumerName",
    ]


def test_patching_loader(tmp_path):
    spec_dir = tmp_path / "myservice" / "2020-01-01"
    spec_dir.mkdir(parents=True)
    (spec_dir / "service-2.json").write_text(
        json.dumps({"shapes": {"MyInput": {"type": "structure", "required": ["A"]}}})
    )
    patches = {
        "myservice/2020-01-01/service-2": [
            {"op": "add", "path": "/shapes/MyInput/required", "value": ["A", "B"]}
        ]
    }

    loader = PatchingLoader(patches, extra_search_paths=[str(tmp_path)])
    unpatched = PatchingLoader({}, extra_search_paths=[str(tmp_path)])

    assert loader.load_data("myservice/2020-01-01/service-2")["shapes"]["MyInput"]["required"] == [
        "A",
        "B",
    ]
    assert unpatched.load_data("myservice/2020-01-01/service-2")["shapes"]["MyInput"][
        "required"
    ] == ["A"]
