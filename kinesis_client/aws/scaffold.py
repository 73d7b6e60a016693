import io
import keyword
import re
from functools import cached_property
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set

import click
from botocore.exceptions import UnknownServiceError
from botocore.model import (
    ListShape,
    MapShape,
    OperationModel,
    OperationNotFoundError,
    ServiceModel,
    Shape,
    StringShape,
    StructureShape,
)

from kinesis_client.aws.spec import load_service

# Some minification packages might treat "type" as a keyword, some specs define shapes called like the type "Optional"
KEYWORDS = list(keyword.kwlist) + ["type", "Optional", "Union"]
is_keyword = KEYWORDS.__contains__


def to_valid_python_name(spec_name: str) -> str:
    sanitized = re.sub(r"[^0-9a-zA-Z_]+", "_", spec_name)

    if sanitized[0].isnumeric():
        sanitized = "i_" + sanitized

    if is_keyword(sanitized):
        sanitized += "_"

    if sanitized.startswith("__"):
        sanitized = sanitized[1:]

    return sanitized


def html_to_rst(html: str):
    import pypandoc

    doc = pypandoc.convert_text(html, "rst", format="html")
    doc = doc.replace("\\_", "_")
    doc = doc.replace("\\|", "|")
    doc = doc.replace("\\ ", " ")
    doc = doc.replace("\\", "\\\\")
    rst = doc.strip()
    return rst


class ShapeNode:
    service: ServiceModel
    shape: Shape

    def __init__(self, service: ServiceModel, shape: Shape) -> None:
        super().__init__()
        self.service = service
        self.shape = shape

    @cached_property
    def request_operation(self) -> Optional[OperationModel]:
        for operation_name in self.service.operation_names:
            operation = self.service.operation_model(operation_name)
            if operation.input_shape is None:
                continue

            if to_valid_python_name(self.shape.name) == to_valid_python_name(
                operation.input_shape.name
            ):
                return operation

        return None

    @cached_property
    def is_request(self):
        return self.request_operation is not None

    @property
    def name(self) -> str:
        return to_valid_python_name(self.shape.name)

    @cached_property
    def is_exception(self):
        metadata = self.shape.metadata
        return metadata.get("error") or metadata.get("exception")

    @property
    def is_primitive(self):
        return self.shape.type_name in ["integer", "boolean", "float", "double", "string"]

    @property
    def is_enum(self):
        return isinstance(self.shape, StringShape) and self.shape.enum

    @property
    def dependencies(self) -> List[str]:
        shape = self.shape

        if isinstance(shape, StructureShape):
            return [to_valid_python_name(v.name) for v in shape.members.values()]
        if isinstance(shape, ListShape):
            return [to_valid_python_name(shape.member.name)]
        if isinstance(shape, MapShape):
            return [to_valid_python_name(shape.key.name), to_valid_python_name(shape.value.name)]

        return []

    def _print_structure_declaration(self, output, doc=True, quote_types=False):
        if self.is_exception:
            self._print_as_class(output, "ServiceException", doc)
            return

        if any(map(is_keyword, self.shape.members.keys())):
            self._print_as_typed_dict(output, quote_types=quote_types)
            return

        if self.is_request:
            base = "ServiceRequest"
        else:
            base = "TypedDict, total=False"

        self._print_as_class(output, base, doc, quote_types)

    def _print_as_class(self, output, base: str, doc=True, quote_types=False):
        output.write(f"class {self.name}({base}):\n")

        q = '"' if quote_types else ""

        if doc:
            self.print_shape_doc(output, self.shape)

        if self.is_exception:
            error_spec = self.shape.metadata.get("error", {})
            output.write(f'    code: str = "{error_spec.get("code", self.shape.name)}"\n')
            output.write(f'    sender_fault: bool = {error_spec.get("senderFault", False)}\n')
            output.write(f'    status_code: int = {error_spec.get("httpStatusCode", 400)}\n')
        elif not self.shape.members:
            output.write("    pass\n")

        # the message and the code of an error are set by the exception itself
        remaining_members = {
            k: v
            for k, v in self.shape.members.items()
            if not self.is_exception or k.lower() not in ["message", "code"]
        }

        for k, v in remaining_members.items():
            if k in self.shape.required_members:
                output.write(f"    {k}: {q}{to_valid_python_name(v.name)}{q}\n")
            else:
                output.write(f"    {k}: Optional[{q}{to_valid_python_name(v.name)}{q}]\n")

    def _print_as_typed_dict(self, output, quote_types=False):
        q = '"' if quote_types else ""
        output.write('%s = TypedDict("%s", {\n' % (self.name, self.name))
        for k, v in self.shape.members.items():
            if k in self.shape.required_members:
                output.write(f'    "{k}": {q}{to_valid_python_name(v.name)}{q},\n')
            else:
                output.write(f'    "{k}": Optional[{q}{to_valid_python_name(v.name)}{q}],\n')
        output.write("}, total=False)\n")

    def print_shape_doc(self, output, shape):
        html = shape.documentation
        rst = html_to_rst(html)
        if rst:
            output.write('    """')
            output.write(f"{rst}\n")
            output.write('    """\n\n')

    def print_declaration(self, output, doc=True, quote_types=False):
        shape = self.shape
        name = self.name

        q = '"' if quote_types else ""

        if isinstance(shape, StructureShape):
            self._print_structure_declaration(output, doc, quote_types)
        elif isinstance(shape, ListShape):
            output.write(f"{name} = List[{q}{to_valid_python_name(shape.member.name)}{q}]\n")
        elif isinstance(shape, MapShape):
            output.write(
                f"{name} = Dict[{q}{to_valid_python_name(shape.key.name)}{q}, {q}{to_valid_python_name(shape.value.name)}{q}]\n"
            )
        elif isinstance(shape, StringShape):
            if shape.enum:
                output.write(f"class {name}(ServiceEnum):\n")
                if doc:
                    self.print_shape_doc(output, shape)
                for value in shape.enum:
                    output.write(f'    {to_valid_python_name(value)} = "{value}"\n')
            else:
                output.write(f"{name} = str\n")
        elif shape.type_name in ("integer", "long"):
            output.write(f"{name} = int\n")
        elif shape.type_name in ("double", "float"):
            output.write(f"{name} = float\n")
        elif shape.type_name == "boolean":
            output.write(f"{name} = bool\n")
        elif shape.type_name == "blob":
            output.write(f"{name} = bytes\n")
        elif shape.type_name == "timestamp":
            output.write(f"{name} = datetime\n")
        else:
            output.write(f"# unknown shape type for {name}: {shape.type_name}\n")

    def get_order(self):
        """
        Defines a basic order in which to sort the stack of shape nodes before printing.
        First all non-enum primitives are printed, then enums, then exceptions, then all other types.
        """
        if self.is_primitive:
            if self.is_enum:
                return 1
            else:
                return 0

        if self.is_exception:
            return 2

        return 3


def collect_shapes(service: ServiceModel, operations: Iterable[str] = None) -> Dict[str, Shape]:
    """
    Collects the shapes used by the given operations (their input, output and error shapes and all shapes these
    depend on). If no operations are given, all shapes of the service are collected.

    :param service: the service model
    :param operations: the names of the operations
    :return: the shapes by their python name
    """
    if not operations:
        return {
            to_valid_python_name(name): service.shape_for(name) for name in service.shape_names
        }

    stack: List[Shape] = []
    for operation_name in operations:
        operation = service.operation_model(operation_name)
        if operation.input_shape is not None:
            stack.append(operation.input_shape)
        if operation.output_shape is not None:
            stack.append(operation.output_shape)
        stack.extend(operation.error_shapes)

    shapes: Dict[str, Shape] = {}
    while stack:
        shape = stack.pop()
        name = to_valid_python_name(shape.name)
        if name in shapes:
            continue
        shapes[name] = shape
        if isinstance(shape, StructureShape):
            stack.extend(shape.members.values())
        elif isinstance(shape, ListShape):
            stack.append(shape.member)
        elif isinstance(shape, MapShape):
            stack.extend([shape.key, shape.value])

    # keep the order of the service specification
    order = {to_valid_python_name(name): index for index, name in enumerate(service.shape_names)}
    return dict(sorted(shapes.items(), key=lambda item: order.get(item[0], len(order))))


def generate_service_types(output, service: ServiceModel, operations: Iterable[str] = None, doc=True):
    output.write("from datetime import datetime\n")
    output.write("from typing import Dict, List, Optional, TypedDict\n")
    output.write("\n")
    output.write(
        "from kinesis_client.aws.api import ServiceEnum, ServiceException, ServiceRequest\n"
    )

    # ==================================== print type declarations
    nodes: Dict[str, ShapeNode] = {
        name: ShapeNode(service, shape) for name, shape in collect_shapes(service, operations).items()
    }

    printed: Set[str] = set()
    visited: Set[str] = set()
    stack: List[str] = list(nodes.keys())

    stack = sorted(stack, key=lambda name: nodes[name].get_order())
    stack.reverse()

    last_was_class = True
    while stack:
        name = stack.pop()
        if name in printed:
            continue
        node = nodes[name]

        dependencies = [dep for dep in node.dependencies if dep not in printed]

        if not dependencies or name in visited:
            is_class = node.is_enum or isinstance(node.shape, StructureShape)
            # classes are separated by two blank lines, consecutive aliases are not separated
            output.write("\n\n" if is_class or last_was_class else "")
            # break out of circular dependencies by quoting the types
            node.print_declaration(output, doc=doc, quote_types=bool(dependencies))
            printed.add(name)
            last_was_class = is_class
        else:
            stack.append(name)
            stack.extend(dependencies)
            visited.add(name)


@click.group()
def scaffold():
    pass


@scaffold.command(name="generate")
@click.argument("service", type=str)
@click.option(
    "--operation",
    "operations",
    multiple=True,
    help="the operations to generate the types for (all operations of the service if not set)",
)
@click.option("--doc/--no-doc", default=False, help="whether or not to generate docstrings")
@click.option(
    "--save/--print",
    default=False,
    help="whether or not to save the result into the api directory",
)
@click.option(
    "--path", default="./kinesis_client/aws/api", help="the path where the api should be saved"
)
def generate(service: str, operations: List[str], doc: bool, save: bool, path: str):
    """
    Generate the typed API module for a given AWS service.

    SERVICE is the service to generate the types for (e.g., kinesis)
    """
    from click import ClickException

    try:
        code = generate_code(service, operations, doc=doc)
    except UnknownServiceError:
        raise ClickException(f"unknown service {service}")
    except OperationNotFoundError as e:
        raise ClickException(f"unknown operation {e}")

    if not save:
        # either just print the code to stdout
        click.echo(code)
        return

    # or find the file path and write the code to that location
    create_code_directory(service, code, path)
    click.echo("done!")


def generate_code(service_name: str, operations: Iterable[str] = None, doc: bool = False) -> str:
    model = load_service(service_name)
    output = io.StringIO()
    generate_service_types(output, model, operations, doc=doc)
    return output.getvalue()


def create_code_directory(service_name: str, code: str, base_path: str):
    service_name = service_name.replace("-", "_")
    # handle service names which are reserved keywords in python (f.e. lambda)
    if is_keyword(service_name):
        service_name += "_"
    path = Path(base_path, service_name)

    if not path.exists():
        click.echo(f"creating directory {path}")
        path.mkdir(parents=True)

    file = path / "__init__.py"
    click.echo(f"writing to file {file}")
    file.write_text(code)


if __name__ == "__main__":
    scaffold()
