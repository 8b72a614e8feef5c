"""
Workflow validation logic for linear LLM chains.
"""

from typing import Dict, List, Set

from ..models import NodeType, ProviderType, ValidationResult, Workflow


class WorkflowValidator:
    """
    워크플로우 유효성 검증기

    모든 검사는 독립적으로 실행되며 (short-circuit 없음) 오류가 함께 보고된다.
    Validation never mutates the workflow, so repeated calls give identical results.
    """

    def validate_workflow(self, workflow: Workflow) -> ValidationResult:
        """
        워크플로우 전체 유효성 검증

        Returns:
            ValidationResult: {"isValid": bool, "errors": List[str], "warnings": List[str]}
        """
        errors: List[str] = []
        warnings: List[str] = []

        # 노드 ID 중복 검사
        node_ids = [node.id for node in workflow.nodes]
        if len(node_ids) != len(set(node_ids)):
            errors.append("Duplicate node ids found")

        self._validate_required_nodes(workflow, errors)
        self._validate_edges(workflow, errors)
        self._validate_connectivity(workflow, errors)

        if self._has_cycles(workflow):
            errors.append("Workflow contains cycles")

        self._collect_warnings(workflow, warnings)

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    def _validate_required_nodes(self, workflow: Workflow, errors: List[str]):
        """필수 노드 존재 검증"""
        input_nodes = [node for node in workflow.nodes if node.type == NodeType.INPUT]
        output_nodes = [node for node in workflow.nodes if node.type == NodeType.OUTPUT]

        if not input_nodes:
            errors.append("Workflow must have at least one input node")
        elif len(input_nodes) > 1:
            errors.append("Workflow can only have one input node")

        if not output_nodes:
            errors.append("Workflow must have at least one output node")

    def _validate_edges(self, workflow: Workflow, errors: List[str]):
        """엣지 유효성 검증"""
        node_ids = {node.id for node in workflow.nodes}

        for edge in workflow.edges:
            if edge.source not in node_ids:
                errors.append(f"Edge {edge.id}: unknown source node '{edge.source}'")
            if edge.target not in node_ids:
                errors.append(f"Edge {edge.id}: unknown target node '{edge.target}'")

    def _validate_connectivity(self, workflow: Workflow, errors: List[str]):
        """어떤 엣지에도 연결되지 않은 노드 검출 (노드가 2개 이상일 때만)"""
        if len(workflow.nodes) <= 1:
            return

        connected_nodes: Set[str] = set()
        for edge in workflow.edges:
            connected_nodes.add(edge.source)
            connected_nodes.add(edge.target)

        disconnected = [node.id for node in workflow.nodes if node.id not in connected_nodes]
        if disconnected:
            errors.append(f"Disconnected nodes found: {', '.join(disconnected)}")

    def _has_cycles(self, workflow: Workflow) -> bool:
        """
        모든 노드에서 출발하는 DFS로 순환 검출

        Starting from every node (not only the input) catches cycles in
        disconnected subgraphs. Iterative, with an explicit recursion-stack set.
        """
        post_nodes_map = self._build_post_nodes_map(workflow)
        visited: Set[str] = set()

        for node in workflow.nodes:
            if node.id in visited:
                continue

            on_stack: Set[str] = {node.id}
            visited.add(node.id)
            stack = [(node.id, iter(post_nodes_map.get(node.id, [])))]

            while stack:
                current_id, targets = stack[-1]
                next_id = next(targets, None)
                if next_id is None:
                    on_stack.discard(current_id)
                    stack.pop()
                    continue
                if next_id in on_stack:
                    return True
                if next_id in visited:
                    continue
                visited.add(next_id)
                on_stack.add(next_id)
                stack.append((next_id, iter(post_nodes_map.get(next_id, []))))

        return False

    def _collect_warnings(self, workflow: Workflow, warnings: List[str]):
        """실행은 가능하지만 사용자가 알아야 할 사항"""
        post_nodes_map = self._build_post_nodes_map(workflow)

        for node in workflow.nodes:
            post_nodes = post_nodes_map.get(node.id, [])
            if len(post_nodes) > 1:
                ignored = ", ".join(post_nodes[1:])
                warnings.append(
                    f"Node '{node.id}' has {len(post_nodes)} outgoing edges; only the first "
                    f"(to '{post_nodes[0]}') is followed, ignoring: {ignored}"
                )

            if node.type == NodeType.TRANSFORM:
                warnings.append(f"Transform node '{node.id}' passes its input through unchanged")

            if node.type == NodeType.LLM and node.data.provider and not ProviderType.is_supported(node.data.provider):
                warnings.append(
                    f"LLM node '{node.id}' uses unsupported provider '{node.data.provider}'"
                )

    def _build_post_nodes_map(self, workflow: Workflow) -> Dict[str, List[str]]:
        """각 노드의 post-nodes 맵핑 (엣지 목록 순서 유지)"""
        post_nodes_map: Dict[str, List[str]] = {}

        for node in workflow.nodes:
            post_nodes_map[node.id] = []

        for edge in workflow.edges:
            if edge.source not in post_nodes_map:
                post_nodes_map[edge.source] = []
            post_nodes_map[edge.source].append(edge.target)

        return post_nodes_map
