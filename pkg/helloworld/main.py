"""HTTP Cloud Function deployed by the service topology."""


def handler(request):  # noqa: ARG001
    return "Hello World", 200
