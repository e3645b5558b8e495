from . import ast
from ..runtime.printer import SourcePrinter

# Prefix of every statement: the optional statement label
L = "[{label} ]"
# Prefix of constructs that can be named
N = "[{stmt_name}: ]"

class FortranPrinterVisitor(SourcePrinter, ast.ASTVisitor):
    indent = "    "
    bool_format = (".false.", ".true.")

    templates = {
        "TranslationUnit": "{items#0}",

        "Module": "module {name}{use#}{implicit#}{decl#}"
            "[contains{contains#}]end module {name}",
        "Submodule": "submodule ({parent}) {name}{use#}{implicit#}{decl#}"
            "[contains{contains#}]end submodule {name}",
        "BlockData": "block data[ {name}]{use#}{implicit#}{decl#}"
            "end block data[ {name}]",
        "Program": "program {name}{use#}{implicit#}{decl#}{body#}"
            "[contains{contains#}]end program {name}",

        "Subroutine": "[{attributes* } ]subroutine {name}[({args*, })]"
            "[ {bind}]{use#}{import_stmts#}{implicit#}{decl#}{body#}"
            "[contains{contains#}]end subroutine {name}",
        "Function": "[{attributes* } ]function {name}({args*, })"
            "[ result({return_var})][ {bind}]{use#}{import_stmts#}"
            "{implicit#}{decl#}{body#}[contains{contains#}]"
            "end function {name}",
        "Procedure": "module procedure {name}{use#}{import_stmts#}"
            "{implicit#}{decl#}{body#}[contains{contains#}]"
            "end procedure {name}",

        "Use": "use[, {nature} ::] {module}[, {symbols*, }]",
        "UseOnly": "use[, {nature} ::] {module}, only:[ {symbols*, }]",

        "Declaration": "{vartype}[, {attributes*, }] :: {syms*, }",
        "AttributeDecl": "{attributes*, }[ :: {syms*, }]",
        "Interface": "interface[ {header}]{items#}end interface[ {header}]",
        "AbstractInterface": "abstract interface{items#}end interface",
        "DerivedType": "type[, {attributes*, } ::] {name}{items#}"
            "[contains{contains#}]end type {name}",
        "Enum": "enum[, {attributes*, }]{items#}end enum",
        "Enumerator": "enumerator :: {syms*, }",

        "InterfaceName": "{name}",
        "InterfaceAssignment": "assignment(=)",
        "InterfaceOperator": "operator({op})",
        "InterfaceDefinedOperator": "operator(.{op_name}.)",
        "InterfaceWrite": "write({id})",
        "InterfaceRead": "read({id})",

        "InterfaceProc": "{proc}",
        "InterfaceModuleProcedure": "module procedure {names*, }",

        "DerivedTypeProc": "procedure[({iface})][, {attributes*, }] :: "
            "{symbols*, }",
        "GenericOperator": "generic[, {attributes*, }] :: operator({op}) => "
            "{names*, }",
        "GenericDefinedOperator": "generic[, {attributes*, }] :: "
            "operator(.{op_name}.) => {names*, }",
        "GenericAssignment": "generic[, {attributes*, }] :: assignment(=) => "
            "{names*, }",
        "GenericName": "generic[, {attributes*, }] :: {name} => {names*, }",
        "GenericWrite": "generic[, {attributes*, }] :: write({id}) => "
            "{names*, }",
        "GenericRead": "generic[, {attributes*, }] :: read({id}) => "
            "{names*, }",
        "FinalName": "final :: {name}",
        "Private": "private",

        "Import": "import{modifier}[ {ids*, }]",
        "ImplicitNone": "implicit none[ ({specs*, })]",
        "Implicit": "implicit {vartype} ({specs*, })",
        "letter_spec": "[{start}-]{end}",

        "UseSymbol": "[{local_rename} => ]{remote_sym}",
        "UseAssignment": "assignment(=)",
        "UseIntrinsicOperator": "operator({op})",
        "UseDefinedOperator": "operator(.{op_name}.)",
        "UseWrite": "write({id})",
        "UseRead": "read({id})",

        "AttrBind": "{bind}",
        "AttrDimension": "dimension({dims*, })",
        "AttrCodimension": r"codimension\[{dims*, }\]",
        "AttrExtends": "extends({name})",
        "AttrIntent": "intent({intent})",
        "AttrPass": "pass[({name})]",
        "AttrType": "{vartype}[({kind*, })]",
        "AttrDerivedType": "type({name})",
        "AttrClass": "class({name|*})",
        "SimpleAttribute": "{attr}",

        "KindValue": "[{name}=]{value}",
        "KindStar": "*",
        "KindColon": ":",

        "var_sym": "{name}[({dims*, })][*{length}][{sym}{initializer}]",

        "ArrayIndex": "{value}",
        "ArraySection": "[{start}]:[{end}][:{step}]",
        "ArrayStar": "*",
        "KeywordArg": "{name}={value}",
        "CoarrayIndex": "{value}",
        "CoarraySection": "[{start}]:[{end}]",
        "CoarrayStar": "*",

        "Allocate": L + "allocate({args*, }[, {keywords*, }])",
        "Deallocate": L + "deallocate({args*, }[, {keywords*, }])",
        "Assign": L + "assign {target_label} to {var}",
        "Assignment": L + "{target} = {value}",
        "Associate": L + "{target} => {value}",
        "Backspace": L + "backspace({args*, })",
        "Close": L + "close({args*, })",
        "Continue": L + "continue",
        "Cycle": L + "cycle[ {stmt_name}]",
        "Exit": L + "exit[ {stmt_name}]",
        "Endfile": L + "endfile({args*, })",
        "Entry": L + "entry {name}[({args*, })][ result({result})]",
        "ErrorStop": L + "error stop[ {code}][, quiet={quiet}]",
        "EventPost": L + "event post ({variable}[, {keywords*, }])",
        "EventWait": L + "event wait ({variable}[, {keywords*, }])",
        "Flush": L + "flush({args*, })",
        "FormTeam": L + "form team ({team_number}, {team_variable}"
            "[, {keywords*, }])",
        "Format": L + "format({fmt})",
        "GoTo": L + "go to {goto_label}",
        "ComputedGoTo": L + "go to ({labels*, }) {selector}",
        "Inquire": L + "inquire({args*, })[ {values*, }]",
        "Nullify": L + "nullify({args*, })",
        "Open": L + "open({args*, })",
        "Print": L + "print {fmt|*}[, {values*, }]",
        "Read": L + "read({args*, })[ {values*, }]",
        "Return": L + "return[ {value}]",
        "Rewind": L + "rewind({args*, })",
        "Stop": L + "stop[ {code}][, quiet={quiet}]",
        "SubroutineCall": L + "call {members*}{name}[({args*, })]",
        "SyncAll": L + "sync all[ ({keywords*, })]",
        "SyncImages": L + "sync images ({images|*}[, {keywords*, }])",
        "SyncMemory": L + "sync memory[ ({keywords*, })]",
        "SyncTeam": L + "sync team ({team}[, {keywords*, }])",
        "Write": L + "write({args*, })[ {values*, }]",
        "DataStmt": L + "data {items*, }",
        "IfArithmetic": L + "if ({test}) {lt_label}, {eq_label}, {gt_label}",
        "IfSingle": L + "if ({test}) {body}",
        "ForAllSingle": L + "forall ({controls*, }[, {mask}]) {assign}",
        "If": L + N + "if ({test}) then{body#}[else{orelse#}]"
            "end if[ {stmt_name}]",
        "DoLoop": L + N + "do[ {var} = {start}, {end}[, {increment}]]"
            "{body#}end do[ {stmt_name}]",
        "WhileLoop": L + N + "do while ({test}){body#}end do[ {stmt_name}]",
        "DoConcurrentLoop": L + N + "do concurrent ({controls*, }[, {mask}])"
            "[ {locality* }]{body#}end do[ {stmt_name}]",
        "ForAll": L + N + "forall ({controls*, }[, {mask}]){body#}"
            "end forall[ {stmt_name}]",
        "Where": L + N + "where ({test}){body#}[elsewhere{orelse#}]"
            "end where[ {stmt_name}]",
        "Select": L + N + "select case ({test}){body#}end select[ {stmt_name}]",
        "SelectType": L + N + "select type ([{assoc_name} => ]{selector})"
            "{body#}end select[ {stmt_name}]",
        "SelectRank": L + N + "select rank ([{assoc_name} => ]{selector})"
            "{body#}end select[ {stmt_name}]",
        "Block": L + N + "block{use#}{import_stmts#}{decl#}{body#}"
            "end block[ {stmt_name}]",
        "AssociateBlock": L + N + "associate ({syms*, }){body#}"
            "end associate[ {stmt_name}]",
        "Critical": L + N + "critical[ ({keywords*, })]{body#}"
            "end critical[ {stmt_name}]",
        "ChangeTeam": L + N + "change team ({team_value}"
            "[, {coarray_assoc*, }][, {sync_stat*, }]){body#}"
            "end team[ {stmt_name}]",

        "CaseStmt": "case ({test*, }){body#}",
        "CaseDefault": "case default{body#}",
        "CaseCondExpr": "{cond}",
        "CaseCondRange": "[{start}]:[{end}]",
        "TypeStmtName": "type is ({name}){body#}",
        "TypeStmtType": "type is ({vartype}){body#}",
        "ClassStmt": "class is ({name}){body#}",
        "ClassDefault": "class default{body#}",
        "RankExpr": "rank ({value}){body#}",
        "RankStar": "rank (*){body#}",
        "RankDefault": "rank default{body#}",

        "BoolOp": "{left} {op} {right}",
        "BinOp": "{left} {op} {right}",
        "DefBinOp": "{left} .{op_name}. {right}",
        "StrOp": "{left} {op} {right}",
        "UnaryOp": "{op}{operand}",
        "Compare": "{left} {op} {right}",
        "FuncCallOrArray": "{members*}{func}({args*, })[({subargs*, })]",
        "CoarrayRef": r"{members*}{name}[({args*, })]\[{coargs*, }\]",
        "ArrayInitializer": r"\[[{vartype} :: ]{args*, }\]",
        "ImpliedDoLoop": "({values*, }, {var} = {start}, {end}"
            "[, {increment}])",
        "Num": "{n}[_{kind}]",
        "Real": "{n}",
        "Complex": "({re}, {im})",
        "BOZ": "{s}",
        "Name": "{members*}{id}",
        "Logical": "{value}[_{kind}]",
        "Parenthesis": "({operand})",
        "Star": "*",

        "bind_spec": "bind({args*, })",
        "keyword": "[{name}=]{value}",
        "struct_member": "{name}[({args*, })]%",
        "arg": "{name}",
        "concurrent_control": "{var}={start}:{end}[:{increment}]",
        "concurrent_locality": "{kind}({vars*, })",
        "data_stmt_set": "{objects*, } /{values*, }/",
    }

    operators = {
        "ImportDefault": "",
        "ImportOnly": ", only:",
        "ImportNone": ", none",
        "ImportAll": ", all",

        "ImplicitNoneExternal": "external",
        "ImplicitNoneType": "type",

        "AttrAbstract": "abstract",
        "AttrAllocatable": "allocatable",
        "AttrAsynchronous": "asynchronous",
        "AttrContiguous": "contiguous",
        "AttrDeferred": "deferred",
        "AttrElemental": "elemental",
        "AttrExternal": "external",
        "AttrImpure": "impure",
        "AttrIntrinsic": "intrinsic",
        "AttrKind": "kind",
        "AttrLen": "len",
        "AttrModule": "module",
        "AttrNoPass": "nopass",
        "AttrNonIntrinsic": "non_intrinsic",
        "AttrNonOverridable": "non_overridable",
        "AttrOptional": "optional",
        "AttrParameter": "parameter",
        "AttrPointer": "pointer",
        "AttrPrivate": "private",
        "AttrProtected": "protected",
        "AttrPublic": "public",
        "AttrPure": "pure",
        "AttrRecursive": "recursive",
        "AttrSave": "save",
        "AttrSequence": "sequence",
        "AttrTarget": "target",
        "AttrValue": "value",
        "AttrVolatile": "volatile",

        "In": "in",
        "Out": "out",
        "InOut": "inout",

        "TypeInteger": "integer",
        "TypeReal": "real",
        "TypeDoublePrecision": "double precision",
        "TypeComplex": "complex",
        "TypeDoubleComplex": "double complex",
        "TypeLogical": "logical",
        "TypeCharacter": "character",

        "SymbolNone": "",
        "SymbolEqual": " = ",
        "SymbolArrow": " => ",

        "And": ".and.",
        "Or": ".or.",
        "Eqv": ".eqv.",
        "NEqv": ".neqv.",

        "Add": "+",
        "Sub": "-",
        "Mul": "*",
        "Div": "/",
        "Pow": "**",

        "Concat": "//",

        "UAdd": "+",
        "USub": "-",
        "Not": ".not. ",

        "Eq": "==",
        "NotEq": "/=",
        "Lt": "<",
        "LtE": "<=",
        "Gt": ">",
        "GtE": ">=",

        "OpAdd": "+",
        "OpSub": "-",
        "OpMul": "*",
        "OpDiv": "/",
        "OpPow": "**",
        "OpConcat": "//",
        "OpEq": "==",
        "OpNotEq": "/=",
        "OpLt": "<",
        "OpLtE": "<=",
        "OpGt": ">",
        "OpGtE": ">=",
        "OpNot": ".not.",
        "OpAnd": ".and.",
        "OpOr": ".or.",
        "OpEqv": ".eqv.",
        "OpNEqv": ".neqv.",

        "ConcurrentLocal": "local",
        "ConcurrentLocalInit": "local_init",
        "ConcurrentShared": "shared",
        "ConcurrentDefault": "default",
    }

    def visit_String(self, node):
        if node.kind is not None:
            self.write(node.kind + "_")
        self.write('"%s"' % node.s.replace('"', '""'))


def ast_to_src(a):
    """
    Returns the Fortran source code of the tree `a` (a handle or a node).
    """
    return FortranPrinterVisitor().print(a)
