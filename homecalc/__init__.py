"""HomeCalc AI: schema-constrained model invocation for the calculator catalog."""
