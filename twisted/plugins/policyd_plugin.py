from twisted.application.service import ServiceMaker

flashpolicy = ServiceMaker(
    "Flash policy server",
    "policyd.tap",
    "Serve a fixed policy document to every TCP client",
    "flashpolicy")
